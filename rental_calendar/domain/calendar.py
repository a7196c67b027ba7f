import calendar
import datetime
from dataclasses import dataclass

from rental_calendar.domain.availability import AvailabilityOracle
from rental_calendar.domain.selection import SelectionState
from rental_calendar.utils.dates import shift_month

WEEKS_IN_FIXED_GRID = 6

_sunday_first = calendar.Calendar(firstweekday=calendar.SUNDAY)


@dataclass(frozen=True)
class CalendarDay:
    date: datetime.date
    is_current_month: bool
    is_past: bool
    is_today: bool
    is_unavailable: bool
    is_selected: bool
    is_selection_start: bool
    is_selection_end: bool
    is_hovering: bool

    @property
    def is_clickable(self) -> bool:
        return self.is_current_month and not self.is_past and not self.is_unavailable


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    weeks: tuple[tuple[CalendarDay, ...], ...]

    @property
    def first_day(self) -> datetime.date:
        return datetime.date(self.year, self.month, 1)

    @property
    def days(self) -> list[CalendarDay]:
        return [day for week in self.weeks for day in week]

    @property
    def available_count(self) -> int:
        """Bookable days of the month itself"""
        return sum(1 for day in self.days if day.is_clickable)


def build_day(
    day: datetime.date,
    month: int,
    oracle: AvailabilityOracle,
    selection: SelectionState,
) -> CalendarDay:
    start = selection.start_date
    end = selection.end_date
    hover = selection.hover_date

    return CalendarDay(
        date=day,
        is_current_month=day.month == month,
        is_past=oracle.is_past(day),
        is_today=day == oracle.today,
        is_unavailable=oracle.is_unavailable(day),
        is_selected=bool(start and end and start <= day <= end),
        is_selection_start=start is not None and day == start,
        is_selection_end=end is not None and day == end,
        # Preview of (start, hover] while the departure date is being picked
        is_hovering=bool(hover and start and not end and start < day <= hover),
    )


def build_month(
    reference: datetime.date,
    *,
    oracle: AvailabilityOracle,
    selection: SelectionState | None = None,
    fixed_weeks: bool = False,
) -> CalendarMonth:
    """
    Month grid of Sunday-first weeks around `reference`'s month.

    The grid starts on the Sunday on or before the 1st and ends with the week
    holding the month's last day. With fixed_weeks the following weeks are
    appended until there are six, so consecutive months have equal height.
    """
    selection = selection or SelectionState()
    year, month = reference.year, reference.month

    weeks = _sunday_first.monthdatescalendar(year, month)
    while fixed_weeks and len(weeks) < WEEKS_IN_FIXED_GRID:
        last = weeks[-1][-1]
        weeks.append([last + datetime.timedelta(days=i) for i in range(1, 8)])

    return CalendarMonth(
        year=year,
        month=month,
        weeks=tuple(
            tuple(build_day(day, month, oracle, selection) for day in week)
            for week in weeks
        ),
    )


def build_months(
    reference: datetime.date,
    count: int,
    *,
    oracle: AvailabilityOracle,
    selection: SelectionState | None = None,
    fixed_weeks: bool = False,
) -> list[CalendarMonth]:
    first = reference.replace(day=1)
    return [
        build_month(
            shift_month(first, offset),
            oracle=oracle,
            selection=selection,
            fixed_weeks=fixed_weeks,
        )
        for offset in range(count)
    ]


def previous_month(value: datetime.date) -> datetime.date:
    return shift_month(value.replace(day=1), -1)


def next_month(value: datetime.date) -> datetime.date:
    return shift_month(value.replace(day=1), 1)
