"""Calendar endpoints for the booking flow.

- Month grids with per-day availability and selection flags
- Server-side application of a selection event (click / hover / reset)

All dates are in YYYY-MM-DD format. Unavailable dates are fetched from the
rental API on every request; a failed fetch still returns a calendar with only
past days blocked, plus the banner text in `error`.
"""

import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.status import HTTP_400_BAD_REQUEST

from rental_calendar.core.config import settings
from rental_calendar.core.messages import messages
from rental_calendar.domain.availability import AvailabilityOracle
from rental_calendar.domain.calendar import CalendarMonth, build_months
from rental_calendar.domain.selection import (
    DayClicked,
    DayHovered,
    HoverCleared,
    SelectionReset,
    SelectionState,
    reduce_selection,
)
from rental_calendar.schemas.availability import (
    CalendarDayOut,
    CalendarMonthOut,
    CalendarResponse,
    DateRangeOut,
    IntervalOut,
    RangeErrorOut,
    SelectionEventIn,
    SelectionRequest,
    SelectionResponse,
    SelectionStateSchema,
)
from rental_calendar.services.availability_service import (
    AvailabilityService,
    availability_service,
)
from rental_calendar.utils.dates import local_today, month_title, parse_month

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["calendar"])


def get_availability_service() -> AvailabilityService:
    return availability_service


def get_today() -> dt.date:
    return local_today()


def _month_out(month: CalendarMonth) -> CalendarMonthOut:
    return CalendarMonthOut(
        month=f"{month.year:04d}-{month.month:02d}",
        title=month_title(month.year, month.month),
        weeks=[
            [
                CalendarDayOut(
                    date=day.date,
                    is_current_month=day.is_current_month,
                    is_past=day.is_past,
                    is_today=day.is_today,
                    is_unavailable=day.is_unavailable,
                    is_selected=day.is_selected,
                    is_selection_start=day.is_selection_start,
                    is_selection_end=day.is_selection_end,
                    is_hovering=day.is_hovering,
                    is_clickable=day.is_clickable,
                )
                for day in week
            ]
            for week in month.weeks
        ],
        available_count=month.available_count,
    )


def _state_in(schema: SelectionStateSchema) -> SelectionState:
    return SelectionState(
        start_date=schema.start_date,
        end_date=schema.end_date,
        hover_date=schema.hover_date,
        is_selecting_end=schema.is_selecting_end,
    )


def _state_out(state: SelectionState) -> SelectionStateSchema:
    return SelectionStateSchema(
        start_date=state.start_date,
        end_date=state.end_date,
        hover_date=state.hover_date,
        is_selecting_end=state.is_selecting_end,
    )


def _event_in(event: SelectionEventIn):
    if event.type == "click":
        return DayClicked(event.date)
    if event.type == "hover":
        return DayHovered(event.date)
    if event.type == "clear_hover":
        return HoverCleared()
    return SelectionReset()


@router.get(
    "/{property_id}/calendar",
    summary="Get availability calendar",
    response_model=CalendarResponse,
    responses={400: {"description": "Invalid month format (expected YYYY-MM)"}},
)
async def get_calendar(
    property_id: str,
    month: Optional[str] = Query(
        None, description="First month shown (YYYY-MM), defaults to the current month"
    ),
    months: Optional[int] = Query(None, ge=1, le=12),
    fixed_weeks: bool = Query(False, description="Always render six weeks per month"),
    start_date: Optional[dt.date] = None,
    end_date: Optional[dt.date] = None,
    hover_date: Optional[dt.date] = None,
    service: AvailabilityService = Depends(get_availability_service),
    today: dt.date = Depends(get_today),
) -> CalendarResponse:
    if month:
        try:
            first_month = parse_month(month)
        except ValueError as e:
            raise HTTPException(
                status_code=HTTP_400_BAD_REQUEST,
                detail=f"Invalid month: {e}",
            ) from e
    else:
        first_month = today.replace(day=1)

    months_count = months or settings.calendar_months
    last_year = (first_month.year * 12 + first_month.month - 2 + months_count) // 12
    # Grids spill into neighbouring weeks, so the edge years are not renderable
    if first_month.year <= dt.MINYEAR or last_year >= dt.MAXYEAR:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail=f"Month out of range: {first_month.strftime('%Y-%m')}",
        )

    loaded = await service.load_unavailable_intervals(property_id, today=today)
    oracle = AvailabilityOracle(loaded.intervals, today)
    selection = SelectionState(
        start_date=start_date,
        end_date=end_date,
        hover_date=hover_date,
        is_selecting_end=start_date is not None and end_date is None,
    )

    grids = build_months(
        first_month,
        months_count,
        oracle=oracle,
        selection=selection,
        fixed_weeks=fixed_weeks,
    )

    return CalendarResponse(
        property_id=property_id,
        today=today,
        months=[_month_out(grid) for grid in grids],
        unavailable_dates=[
            IntervalOut(
                start_date=interval.start_date,
                end_date=interval.end_date,
                booking_type=interval.booking_type,
            )
            for interval in loaded.intervals
        ],
        error=loaded.error,
    )


@router.post(
    "/{property_id}/selection",
    summary="Apply a selection event",
    response_model=SelectionResponse,
)
async def apply_selection(
    property_id: str,
    payload: SelectionRequest,
    service: AvailabilityService = Depends(get_availability_service),
    today: dt.date = Depends(get_today),
) -> SelectionResponse:
    """Reduces `event` into `state` against freshly loaded availability."""
    loaded = await service.load_unavailable_intervals(property_id, today=today)
    oracle = AvailabilityOracle(loaded.intervals, today)

    result = reduce_selection(_state_in(payload.state), _event_in(payload.event), oracle)

    committed = None
    if result.committed is not None:
        committed = DateRangeOut(
            start_date=result.committed.start_date,
            end_date=result.committed.end_date,
            nights=result.committed.nights,
        )

    error = None
    if result.rejection is not None:
        logger.info(f"Selection rejected for property {property_id}: {result.rejection}")
        error = RangeErrorOut(
            message=messages.RANGE_UNAVAILABLE,
            start_date=result.rejection.start_date,
            end_date=result.rejection.end_date,
            conflict_date=result.rejection.conflict_date,
        )

    return SelectionResponse(
        state=_state_out(result.state),
        committed=committed,
        error=error,
        load_error=loaded.error,
    )
