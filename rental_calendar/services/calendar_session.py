import datetime
import logging
from typing import Callable, Optional

from rental_calendar.core.config import settings
from rental_calendar.domain.availability import AvailabilityOracle, UnavailableInterval
from rental_calendar.domain.calendar import (
    CalendarDay,
    CalendarMonth,
    build_months,
    next_month,
    previous_month,
)
from rental_calendar.domain.selection import (
    DayClicked,
    DayHovered,
    HoverCleared,
    RangeUnavailableError,
    SelectionEvent,
    SelectionReset,
    SelectionResult,
    SelectionState,
    reduce_selection,
)
from rental_calendar.services.availability_service import (
    AvailabilityService,
    availability_service,
)
from rental_calendar.utils.dates import local_today

logger = logging.getLogger(__name__)

RangeSelectedCallback = Callable[[datetime.date, datetime.date], None]
RangeRejectedCallback = Callable[[RangeUnavailableError], None]


class CalendarSession:
    """
    State of one rendered availability calendar.

    Holds the fetched intervals, the selection and the visible month, and
    forwards committed or rejected ranges to the booking flow callbacks.
    """

    def __init__(
        self,
        property_id: Optional[str] = None,
        *,
        on_range_selected: Optional[RangeSelectedCallback] = None,
        on_range_rejected: Optional[RangeRejectedCallback] = None,
        service: Optional[AvailabilityService] = None,
        today_provider: Callable[[], datetime.date] = local_today,
        months_count: Optional[int] = None,
        fixed_weeks: bool = False,
    ):
        self.property_id = property_id
        self.on_range_selected = on_range_selected
        self.on_range_rejected = on_range_rejected
        self.service = service or availability_service
        self.today_provider = today_provider
        self.months_count = months_count or settings.calendar_months
        self.fixed_weeks = fixed_weeks

        self.intervals: tuple[UnavailableInterval, ...] = ()
        self.error: Optional[str] = None
        self.loading = False
        self.state = SelectionState()
        self.current_month = self.today_provider().replace(day=1)

        # Monotonic token of the latest load; older responses are dropped
        self._request_seq = 0

    @property
    def today(self) -> datetime.date:
        return self.today_provider()

    @property
    def oracle(self) -> AvailabilityOracle:
        return AvailabilityOracle(self.intervals, self.today)

    async def load(self, property_id: Optional[str] = None) -> bool:
        """
        (Re)loads unavailable dates, switching property if one is given.

        Returns False when a newer load started meanwhile and this response
        was discarded.
        """
        if property_id is not None and property_id != self.property_id:
            self.property_id = property_id
            self.state = SelectionState()
            # Blackouts of the previous property must not gate clicks meanwhile
            self.intervals = ()
            self.error = None
        if not self.property_id:
            return False

        self._request_seq += 1
        token = self._request_seq
        requested_for = self.property_id
        self.loading = True
        self.error = None

        result = await self.service.load_unavailable_intervals(
            requested_for, today=self.today
        )

        if token != self._request_seq:
            logger.debug(
                f"Discarding stale availability for property {requested_for} "
                f"(token {token}, latest {self._request_seq})"
            )
            return False

        self.intervals = tuple(result.intervals)
        self.error = result.error
        self.loading = False
        return True

    def dispatch(self, event: SelectionEvent) -> SelectionResult:
        result = reduce_selection(self.state, event, self.oracle)
        self.state = result.state

        if result.committed is not None:
            logger.info(
                f"Range committed for property {self.property_id}: "
                f"{result.committed.start_date} - {result.committed.end_date}"
            )
            if self.on_range_selected:
                self.on_range_selected(
                    result.committed.start_date, result.committed.end_date
                )
        elif result.rejection is not None:
            logger.info(f"Range rejected for property {self.property_id}: {result.rejection}")
            if self.on_range_rejected:
                self.on_range_rejected(result.rejection)

        return result

    def click(self, day: datetime.date) -> SelectionResult:
        return self.dispatch(DayClicked(day))

    def click_day(self, day: CalendarDay) -> SelectionResult:
        """Click on a rendered cell; cells of other months and blocked days are inert"""
        if not day.is_clickable:
            return SelectionResult(self.state)
        return self.click(day.date)

    def hover(self, day: datetime.date) -> SelectionResult:
        return self.dispatch(DayHovered(day))

    def clear_hover(self) -> SelectionResult:
        return self.dispatch(HoverCleared())

    def reset(self) -> SelectionResult:
        return self.dispatch(SelectionReset())

    def previous_month(self) -> datetime.date:
        self.current_month = previous_month(self.current_month)
        return self.current_month

    def next_month(self) -> datetime.date:
        self.current_month = next_month(self.current_month)
        return self.current_month

    def go_to_today(self) -> datetime.date:
        self.current_month = self.today.replace(day=1)
        return self.current_month

    def show_month(self, month: datetime.date) -> datetime.date:
        self.current_month = month.replace(day=1)
        return self.current_month

    def months(self) -> list[CalendarMonth]:
        return build_months(
            self.current_month,
            self.months_count,
            oracle=self.oracle,
            selection=self.state,
            fixed_weeks=self.fixed_weeks,
        )
