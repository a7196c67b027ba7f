import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Load variables from .env
load_dotenv()


class Settings(BaseModel):
    # Rental marketplace REST API
    api_base_url: str = "http://localhost:8000/api/v1"
    api_access_token: str = ""  # If empty, requests go out without Authorization
    api_timeout_seconds: float = 10

    # Calendar settings
    availability_horizon_months: int = 7  # Unavailable dates are fetched today .. today + N months
    calendar_months: int = 2  # Months rendered side by side
    timezone: str = "UTC"

    # Telegram front end (disabled when token is empty)
    telegram_bot_token: str = ""
    default_property_id: str = ""

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold


settings = Settings(
    api_base_url=os.environ.get("API_BASE_URL", "http://localhost:8000/api/v1"),
    api_access_token=os.environ.get("API_ACCESS_TOKEN", ""),
    api_timeout_seconds=float(os.environ.get("API_TIMEOUT_SECONDS", "10")),
    availability_horizon_months=int(
        os.environ.get("AVAILABILITY_HORIZON_MONTHS", "7")
    ),
    calendar_months=int(os.environ.get("CALENDAR_MONTHS", "2")),
    timezone=os.environ.get("TIMEZONE", "UTC"),
    telegram_bot_token=os.environ.get("TELEGRAM_BOT_TOKEN", ""),
    default_property_id=os.environ.get("DEFAULT_PROPERTY_ID", ""),
    log_level=os.environ.get("LOG_LEVEL", "INFO"),
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
)
