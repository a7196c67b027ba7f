import asyncio
import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from rental_calendar.core.config import settings
from rental_calendar.core.messages import messages
from rental_calendar.domain.availability import DateRange, UnavailableInterval
from rental_calendar.schemas.availability import AvailabilityQuote, UnavailableDatePayload
from rental_calendar.services.rental_api_service import RentalAPIService, rental_api_service
from rental_calendar.utils.dates import format_date_for_api, local_today, shift_month

logger = logging.getLogger(__name__)


@dataclass
class IntervalLoadResult:
    intervals: List[UnavailableInterval] = field(default_factory=list)
    # User-facing banner text when the fetch failed
    error: Optional[str] = None


def parse_unavailable_intervals(data: Any) -> List[UnavailableInterval]:
    """
    Extracts blackout intervals from a check_availability body.

    all_unavailable_dates wins over unavailable_dates whenever the key is
    present, even as an empty list; anything missing or malformed yields no
    intervals instead of an exception.
    """
    if not isinstance(data, dict):
        logger.warning(f"Response does not contain unavailable dates: {data!r}")
        return []

    raw = data.get("all_unavailable_dates")
    if raw is None:
        raw = data.get("unavailable_dates")
    raw = raw or []
    if not isinstance(raw, list):
        logger.warning(f"Unavailable dates are not a list: {raw!r}")
        return []

    intervals: List[UnavailableInterval] = []
    for entry in raw:
        try:
            intervals.append(UnavailableDatePayload.model_validate(entry).to_interval())
        except ValidationError as e:
            logger.warning(f"Skipping malformed unavailable interval {entry!r}: {e}")
    return intervals


class AvailabilityService:
    """Loads availability of a property for the calendar"""

    def __init__(self, api: Optional[RentalAPIService] = None):
        self.api = api or rental_api_service

    async def load_unavailable_intervals(
        self,
        property_id: str,
        today: Optional[datetime.date] = None,
    ) -> IntervalLoadResult:
        """
        Fetches blackout intervals for today .. today + horizon.

        A failed request is logged and degrades to an empty interval list with
        a banner message: the calendar stays usable, only past days blocked.
        """
        today = today or local_today()
        horizon_end = shift_month(today, settings.availability_horizon_months)

        try:
            data = await asyncio.to_thread(
                self.api.check_availability,
                property_id,
                format_date_for_api(today),
                format_date_for_api(horizon_end),
            )
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Error loading unavailable dates for property {property_id}: {e}")
            return IntervalLoadResult(error=messages.AVAILABILITY_LOAD_FAILED)

        intervals = parse_unavailable_intervals(data)
        logger.info(f"Loaded {len(intervals)} unavailable intervals for property {property_id}")
        return IntervalLoadResult(intervals=intervals)

    async def get_quote(
        self, property_id: str, date_range: DateRange
    ) -> Optional[AvailabilityQuote]:
        """Price quote for a committed range, None when it cannot be fetched"""
        try:
            data = await asyncio.to_thread(
                self.api.check_availability,
                property_id,
                format_date_for_api(date_range.start_date),
                format_date_for_api(date_range.end_date),
            )
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Error fetching price quote for property {property_id}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Unexpected quote response: {data!r}")
            return None

        try:
            return AvailabilityQuote.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Malformed quote response for property {property_id}: {e}")
            return None


availability_service = AvailabilityService()
