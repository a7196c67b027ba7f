"""
Client for the rental marketplace REST API
"""
import requests
from typing import Dict, Optional
import logging

from rental_calendar.core.config import settings

logger = logging.getLogger(__name__)


class RentalAPIService:
    """Thin wrapper around the property availability endpoints"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.access_token = (
            access_token if access_token is not None else settings.api_access_token
        )
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def check_availability(
        self,
        property_id: str,
        start_date: str,
        end_date: str,
    ) -> Dict:
        """
        Calls check_availability for a property

        Args:
            property_id: property id
            start_date: period start (format: YYYY-MM-DD)
            end_date: period end (format: YYYY-MM-DD)

        Returns:
            Decoded JSON body. Depending on the backend it holds
            all_unavailable_dates / unavailable_dates and, for a concrete
            stay, the price quote fields.

        Raises:
            requests.RequestException on network or HTTP errors,
            ValueError when the body is not JSON.
        """
        url = f"{self.base_url}/properties/properties/{property_id}/check_availability/"
        logger.info(
            f"Checking availability for property {property_id} "
            f"from {start_date} to {end_date}"
        )

        try:
            response = self.session.get(
                url,
                headers=self._headers(),
                params={"start_date": start_date, "end_date": end_date},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()

        except requests.exceptions.HTTPError as e:
            logger.error(f"HTTP error: {e}")
            logger.error(
                f"Response body: {e.response.text if e.response is not None else 'No response'}"
            )
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to check availability: {e}")
            raise


rental_api_service = RentalAPIService()
