"""
Date helpers shared by the calendar engine and its front ends
"""

import calendar
import datetime
from typing import Iterator
from zoneinfo import ZoneInfo

from rental_calendar.core.config import settings

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def local_today() -> datetime.date:
    """Current date in the configured timezone"""
    return datetime.datetime.now(ZoneInfo(settings.timezone)).date()


def format_date_for_api(value: datetime.date) -> str:
    """YYYY-MM-DD, no time component"""
    return value.strftime("%Y-%m-%d")


def format_date_display(value: datetime.date) -> str:
    return f"{value.day} {MONTH_NAMES[value.month - 1]} {value.year}"


def month_title(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def parse_api_date(raw) -> datetime.date:
    """
    Parse a date coming from the API.

    Accepts date/datetime objects and ISO strings with or without a time part;
    only the calendar day is kept.
    """
    if isinstance(raw, datetime.datetime):
        return raw.date()
    if isinstance(raw, datetime.date):
        return raw
    if not isinstance(raw, str) or len(raw) < 10:
        raise ValueError(f"Not an ISO date: {raw!r}")
    return datetime.date.fromisoformat(raw[:10])


def parse_month(value: str) -> datetime.date:
    """'YYYY-MM' -> first day of that month"""
    year_str, sep, month_str = value.partition("-")
    if not sep or len(year_str) != 4 or len(month_str) != 2:
        raise ValueError(f"Expected YYYY-MM, got {value!r}")
    return datetime.date(int(year_str), int(month_str), 1)


def shift_month(value: datetime.date, months: int) -> datetime.date:
    """Move by whole months, clamping the day to the target month's length"""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    _, days_in_month = calendar.monthrange(year, month)
    return value.replace(year=year, month=month, day=min(value.day, days_in_month))


def iter_days(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """Every day from start to end, both inclusive"""
    day = start
    while day <= end:
        yield day
        day += datetime.timedelta(days=1)
