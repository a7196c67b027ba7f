"""
Two-click date range selection.

The selection is an immutable SelectionState; every UI event is reduced into a
new state by reduce_selection(). The transition that completes a valid range
carries it in SelectionResult.committed, so a caller that notifies on
`committed` notifies exactly once per completed range.
"""

import datetime
from dataclasses import dataclass, replace

from rental_calendar.domain.availability import AvailabilityOracle, DateRange


class RangeUnavailableError(Exception):
    """The picked range runs into a day that cannot be booked"""

    def __init__(
        self,
        start_date: datetime.date,
        end_date: datetime.date,
        conflict_date: datetime.date,
    ):
        self.start_date = start_date
        self.end_date = end_date
        self.conflict_date = conflict_date
        super().__init__(
            f"Range {start_date.isoformat()} - {end_date.isoformat()} "
            f"is unavailable on {conflict_date.isoformat()}"
        )


@dataclass(frozen=True)
class SelectionState:
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None
    hover_date: datetime.date | None = None
    is_selecting_end: bool = False

    @property
    def committed_range(self) -> DateRange | None:
        if self.start_date and self.end_date:
            return DateRange(self.start_date, self.end_date)
        return None


@dataclass(frozen=True)
class DayClicked:
    day: datetime.date


@dataclass(frozen=True)
class DayHovered:
    day: datetime.date


@dataclass(frozen=True)
class HoverCleared:
    pass


@dataclass(frozen=True)
class SelectionReset:
    pass


SelectionEvent = DayClicked | DayHovered | HoverCleared | SelectionReset


@dataclass(frozen=True)
class SelectionResult:
    state: SelectionState
    committed: DateRange | None = None
    rejection: RangeUnavailableError | None = None


def _click(
    state: SelectionState, day: datetime.date, oracle: AvailabilityOracle
) -> SelectionResult:
    if oracle.is_unavailable(day):
        return SelectionResult(state)

    if not state.is_selecting_end or state.start_date is None:
        return SelectionResult(SelectionState(start_date=day, is_selecting_end=True))

    # Zero-night stay: keep waiting for a departure date
    if day == state.start_date:
        return SelectionResult(state)

    if day < state.start_date:
        start, end = day, state.start_date
    else:
        start, end = state.start_date, day

    conflict = oracle.first_unavailable_day(start, end)
    if conflict is not None:
        return SelectionResult(
            SelectionState(start_date=start),
            rejection=RangeUnavailableError(start, end, conflict),
        )

    return SelectionResult(
        SelectionState(start_date=start, end_date=end),
        committed=DateRange(start, end),
    )


def _hover(
    state: SelectionState, day: datetime.date, oracle: AvailabilityOracle
) -> SelectionResult:
    if (
        not state.is_selecting_end
        or state.start_date is None
        or day <= state.start_date
        or oracle.is_unavailable(day)
    ):
        return SelectionResult(state)
    return SelectionResult(replace(state, hover_date=day))


def reduce_selection(
    state: SelectionState, event: SelectionEvent, oracle: AvailabilityOracle
) -> SelectionResult:
    if isinstance(event, DayClicked):
        return _click(state, event.day, oracle)
    if isinstance(event, DayHovered):
        return _hover(state, event.day, oracle)
    if isinstance(event, HoverCleared):
        return SelectionResult(replace(state, hover_date=None))
    if isinstance(event, SelectionReset):
        return SelectionResult(SelectionState())
    raise TypeError(f"Unknown selection event: {event!r}")
