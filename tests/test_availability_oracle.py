"""
Unit tests for the unavailability oracle
"""
from datetime import date, timedelta

from rental_calendar.domain.availability import (
    AvailabilityOracle,
    DateRange,
    UnavailableInterval,
)


class TestIsUnavailable:
    """Single-day lookups"""

    def test_past_days_are_unavailable(self, oracle, today):
        for offset in range(1, 400, 7):
            assert oracle.is_unavailable(today - timedelta(days=offset)) is True

    def test_today_is_available(self, oracle, today):
        assert oracle.is_past(today) is False
        assert oracle.is_unavailable(today) is False

    def test_interval_is_inclusive_on_both_ends(self, oracle):
        for day in (date(2024, 6, 15), date(2024, 6, 16), date(2024, 6, 18)):
            assert oracle.is_unavailable(day) is True

    def test_days_around_interval_are_free(self, oracle):
        assert oracle.is_unavailable(date(2024, 6, 14)) is False
        assert oracle.is_unavailable(date(2024, 6, 19)) is False

    def test_single_day_interval(self, today):
        oracle = AvailabilityOracle(
            [UnavailableInterval(date(2024, 7, 4), date(2024, 7, 4))], today
        )
        assert oracle.is_unavailable(date(2024, 7, 4)) is True
        assert oracle.is_unavailable(date(2024, 7, 5)) is False

    def test_no_intervals_only_past_blocked(self, today):
        oracle = AvailabilityOracle([], today)
        assert oracle.is_unavailable(today - timedelta(days=1)) is True
        assert oracle.is_unavailable(today + timedelta(days=100)) is False


class TestRangeCheck:
    """check_range_is_available walks every day of the range"""

    def test_free_range(self, oracle):
        assert oracle.check_range_is_available(date(2024, 6, 20), date(2024, 6, 25)) is True
        assert oracle.first_unavailable_day(date(2024, 6, 20), date(2024, 6, 25)) is None

    def test_range_spanning_interval(self, oracle):
        assert oracle.check_range_is_available(date(2024, 6, 12), date(2024, 6, 20)) is False
        assert oracle.first_unavailable_day(date(2024, 6, 12), date(2024, 6, 20)) == date(2024, 6, 15)

    def test_range_touching_interval_end(self, oracle):
        """Ending on the first blocked day is still a conflict"""
        assert oracle.check_range_is_available(date(2024, 6, 12), date(2024, 6, 15)) is False

    def test_range_starting_in_past(self, oracle, today):
        start = today - timedelta(days=2)
        assert oracle.first_unavailable_day(start, today) == start

    def test_reversed_arguments_are_normalised(self, oracle):
        assert oracle.check_range_is_available(date(2024, 6, 20), date(2024, 6, 12)) is False
        assert oracle.check_range_is_available(date(2024, 6, 25), date(2024, 6, 20)) is True

    def test_matches_day_by_day_lookup(self, oracle):
        start = date(2024, 6, 10)
        for length in range(0, 15):
            end = start + timedelta(days=length)
            expected = all(
                not oracle.is_unavailable(start + timedelta(days=i))
                for i in range(length + 1)
            )
            assert oracle.check_range_is_available(start, end) is expected


def test_date_range_nights():
    assert DateRange(date(2024, 6, 20), date(2024, 6, 25)).nights == 5
    assert DateRange(date(2024, 12, 30), date(2025, 1, 2)).nights == 3
