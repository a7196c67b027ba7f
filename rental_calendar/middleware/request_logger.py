import logging
import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from rental_calendar.core.config import settings

logger = logging.getLogger(__name__)

PROPERTY_PATH = re.compile(r"^/api/properties/(?P<property_id>[^/]+)/")


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Times calendar API calls.

    Every response carries X-Request-ID (the caller's one when sent). Requests
    slower than LOG_SLOW_REQUEST_THRESHOLD_MS are logged with the property
    they were about; those are almost always waiting on check_availability.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id

        match = PROPERTY_PATH.match(request.url.path)
        property_id = match.group("property_id") if match else None

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            if elapsed_ms > settings.log_slow_request_threshold_ms:
                where = f" for property {property_id}" if property_id else ""
                logger.warning(
                    f"Slow calendar request{where}: {request.method} "
                    f"{request.url.path} -> {status_code} in {elapsed_ms}ms",
                    extra={
                        "request_id": request_id,
                        "property_id": property_id,
                        "status_code": status_code,
                        "duration_ms": elapsed_ms,
                    },
                )
