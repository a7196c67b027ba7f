import logging
import sys

from pythonjsonlogger import jsonlogger

from rental_calendar.core.config import settings

# Chatty third-party loggers and the floor they are kept at
LIBRARY_LEVELS = {
    "aiogram.event": logging.INFO,
    "urllib3": logging.INFO,
    "uvicorn.access": logging.WARNING,
}


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            json_ensure_ascii=False,
        )
    return logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def setup_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(settings.log_format))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Replace handlers so repeated setup (tests, reload) does not duplicate lines
    root_logger.handlers = [handler]

    for name, floor in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(max(level, floor))
