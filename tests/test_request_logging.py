"""
Tests for logging setup and the slow request logger
"""
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pythonjsonlogger import jsonlogger

from rental_calendar.core.config import settings
from rental_calendar.core.logging import build_formatter, setup_logging
from rental_calendar.middleware.request_logger import RequestLoggerMiddleware


@pytest.fixture
def app():
    app = FastAPI()
    app.add_middleware(RequestLoggerMiddleware)

    @app.get("/api/properties/{property_id}/calendar")
    async def calendar(property_id: str):
        return {"property_id": property_id}

    return app


def test_request_id_is_generated(app):
    response = TestClient(app).get("/api/properties/42/calendar")

    assert response.status_code == 200
    assert len(response.headers["X-Request-ID"]) == 32


def test_slow_request_names_property(app, monkeypatch, caplog):
    monkeypatch.setattr(settings, "log_slow_request_threshold_ms", -1)

    with caplog.at_level(logging.WARNING, logger="rental_calendar.middleware.request_logger"):
        TestClient(app).get("/api/properties/42/calendar", headers={"X-Request-ID": "abc"})

    record = next(r for r in caplog.records if r.name.endswith("request_logger"))
    assert "for property 42" in record.getMessage()
    assert record.property_id == "42"
    assert record.request_id == "abc"
    assert record.status_code == 200


def test_fast_request_is_not_logged(app, caplog):
    with caplog.at_level(logging.WARNING, logger="rental_calendar.middleware.request_logger"):
        TestClient(app).get("/api/properties/42/calendar")

    assert not [r for r in caplog.records if r.name.endswith("request_logger")]


def test_formatter_follows_log_format():
    assert isinstance(build_formatter("JSON"), jsonlogger.JsonFormatter)
    assert not isinstance(build_formatter("console"), jsonlogger.JsonFormatter)


def test_setup_logging_replaces_handlers(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "debug")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging()
        setup_logging()

        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
