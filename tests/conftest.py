"""
Pytest configuration for rental calendar tests
"""
import pytest
import sys
from datetime import date
from pathlib import Path

# Ensure rental_calendar is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from rental_calendar.domain.availability import AvailabilityOracle, UnavailableInterval
from rental_calendar.services.availability_service import IntervalLoadResult


TODAY = date(2024, 6, 10)


class FakeAvailabilityService:
    """Stands in for AvailabilityService without touching the network"""

    def __init__(self, intervals=None, error=None, quote=None):
        self.intervals = list(intervals or [])
        self.error = error
        self.quote = quote
        self.calls = []

    async def load_unavailable_intervals(self, property_id, today=None):
        self.calls.append((property_id, today))
        return IntervalLoadResult(intervals=list(self.intervals), error=self.error)

    async def get_quote(self, property_id, date_range):
        return self.quote


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def blackout():
    """Booked 15-18 June 2024"""
    return [UnavailableInterval(date(2024, 6, 15), date(2024, 6, 18), "booking")]


@pytest.fixture
def oracle(blackout):
    return AvailabilityOracle(blackout, TODAY)


@pytest.fixture
def fake_service(blackout):
    return FakeAvailabilityService(intervals=blackout)


@pytest.fixture
def sample_availability_payload():
    """Sample check_availability body"""
    return {
        "available": False,
        "all_unavailable_dates": [
            {"start_date": "2024-06-15", "end_date": "2024-06-18", "booking_type": "booking"},
            {"start_date": "2024-07-01T00:00:00Z", "end_date": "2024-07-03", "booking_type": "blocked"},
        ],
        "unavailable_dates": [
            {"start_date": "2024-06-15", "end_date": "2024-06-18"},
        ],
    }


@pytest.fixture
def make_service():
    return FakeAvailabilityService
