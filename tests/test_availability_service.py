"""
Tests for loading unavailable dates from the rental API
"""
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from rental_calendar.core.messages import messages
from rental_calendar.domain.availability import DateRange, UnavailableInterval
from rental_calendar.services.availability_service import (
    AvailabilityService,
    parse_unavailable_intervals,
)


class TestParseUnavailableIntervals:

    def test_prefers_all_unavailable_dates(self, sample_availability_payload):
        intervals = parse_unavailable_intervals(sample_availability_payload)

        assert intervals == [
            UnavailableInterval(date(2024, 6, 15), date(2024, 6, 18), "booking"),
            UnavailableInterval(date(2024, 7, 1), date(2024, 7, 3), "blocked"),
        ]

    def test_falls_back_to_unavailable_dates(self):
        intervals = parse_unavailable_intervals(
            {"unavailable_dates": [{"start_date": "2024-06-15", "end_date": "2024-06-18"}]}
        )
        assert intervals == [
            UnavailableInterval(date(2024, 6, 15), date(2024, 6, 18), "unknown")
        ]

    def test_empty_primary_list_wins(self):
        intervals = parse_unavailable_intervals(
            {
                "all_unavailable_dates": [],
                "unavailable_dates": [{"start_date": "2024-06-15", "end_date": "2024-06-15"}],
            }
        )
        assert intervals == []

    @pytest.mark.parametrize(
        "payload",
        [None, [], "oops", {}, {"available": True}, {"all_unavailable_dates": "2024-06-15"}],
    )
    def test_missing_or_malformed_payload_yields_nothing(self, payload):
        assert parse_unavailable_intervals(payload) == []

    def test_malformed_entries_are_skipped(self):
        intervals = parse_unavailable_intervals(
            {
                "all_unavailable_dates": [
                    {"start_date": "2024-06-15"},
                    {"start_date": "not a date", "end_date": "2024-06-18"},
                    {"start_date": "2024-06-20", "end_date": "2024-06-19"},
                    "2024-06-21",
                    {"start_date": "2024-06-22", "end_date": "2024-06-23", "booking_type": None},
                ]
            }
        )
        assert intervals == [
            UnavailableInterval(date(2024, 6, 22), date(2024, 6, 23), "unknown")
        ]


class TestLoadUnavailableIntervals:

    @pytest.mark.asyncio
    async def test_fetches_horizon_of_seven_months(self, today, sample_availability_payload):
        api = MagicMock()
        api.check_availability.return_value = sample_availability_payload
        service = AvailabilityService(api=api)

        result = await service.load_unavailable_intervals("prop-1", today=today)

        api.check_availability.assert_called_once_with("prop-1", "2024-06-10", "2025-01-10")
        assert result.error is None
        assert len(result.intervals) == 2

    @pytest.mark.asyncio
    async def test_request_failure_degrades_to_empty(self, today):
        api = MagicMock()
        api.check_availability.side_effect = requests.exceptions.ConnectionError("down")
        service = AvailabilityService(api=api)

        result = await service.load_unavailable_intervals("prop-1", today=today)

        assert result.intervals == []
        assert result.error == messages.AVAILABILITY_LOAD_FAILED

    @pytest.mark.asyncio
    async def test_invalid_json_degrades_to_empty(self, today):
        api = MagicMock()
        api.check_availability.side_effect = ValueError("Expecting value")
        service = AvailabilityService(api=api)

        result = await service.load_unavailable_intervals("prop-1", today=today)

        assert result.intervals == []
        assert result.error == messages.AVAILABILITY_LOAD_FAILED


class TestQuote:

    @pytest.mark.asyncio
    async def test_quote_for_committed_range(self):
        api = MagicMock()
        api.check_availability.return_value = {
            "available": True,
            "nights": 5,
            "base_price": 250000,
            "cleaning_fee": 10000,
            "service_fee": None,
            "discount_amount": 0,
            "total_price": "260000.00",
        }
        service = AvailabilityService(api=api)

        quote = await service.get_quote("prop-1", DateRange(date(2024, 6, 20), date(2024, 6, 25)))

        api.check_availability.assert_called_once_with("prop-1", "2024-06-20", "2024-06-25")
        assert quote.available is True
        assert quote.nights == 5
        assert quote.service_fee == Decimal("0")
        assert quote.total_price == Decimal("260000.00")

    @pytest.mark.asyncio
    async def test_quote_failure_returns_none(self):
        api = MagicMock()
        api.check_availability.side_effect = requests.exceptions.Timeout("slow")
        service = AvailabilityService(api=api)

        quote = await service.get_quote("prop-1", DateRange(date(2024, 6, 20), date(2024, 6, 25)))

        assert quote is None
