import datetime
from dataclasses import dataclass
from typing import Iterable

from rental_calendar.utils.dates import iter_days


@dataclass(frozen=True)
class UnavailableInterval:
    """Closed blackout interval [start_date, end_date]"""

    start_date: datetime.date
    end_date: datetime.date
    booking_type: str = "unknown"

    def contains(self, day: datetime.date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class DateRange:
    start_date: datetime.date
    end_date: datetime.date

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days


class AvailabilityOracle:
    """
    Answers "is this day bookable?" for one property.

    A day is unavailable when it is before today or inside any fetched
    interval (both ends inclusive). The interval set covers one property over
    a few months, so lookups are a plain scan.
    """

    def __init__(
        self,
        intervals: Iterable[UnavailableInterval],
        today: datetime.date,
    ):
        self.intervals = tuple(intervals)
        self.today = today

    def is_past(self, day: datetime.date) -> bool:
        return day < self.today

    def is_blocked(self, day: datetime.date) -> bool:
        return any(interval.contains(day) for interval in self.intervals)

    def is_unavailable(self, day: datetime.date) -> bool:
        return self.is_past(day) or self.is_blocked(day)

    def first_unavailable_day(
        self, start: datetime.date, end: datetime.date
    ) -> datetime.date | None:
        """First unavailable day of [start, end], walking day by day"""
        if end < start:
            start, end = end, start
        for day in iter_days(start, end):
            if self.is_unavailable(day):
                return day
        return None

    def check_range_is_available(
        self, start: datetime.date, end: datetime.date
    ) -> bool:
        return self.first_unavailable_day(start, end) is None
