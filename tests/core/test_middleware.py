"""Tests for accounts/core/middleware.py - request logging and CORS."""

import logging
from unittest.mock import MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from accounts.core.middleware import (
    REQUEST_ID_HEADER,
    RequestLoggingMiddleware,
    add_cors_middleware,
    add_request_logging_middleware,
)
from accounts.core.settings import get_settings


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    return app


def test_generates_request_id(caplog):
    client = TestClient(build_app())

    with caplog.at_level(logging.INFO, logger="accounts.request"):
        response = client.get("/ping")

    request_id = response.headers[REQUEST_ID_HEADER]
    assert len(request_id) == 32
    record = next(r for r in caplog.records if r.name == "accounts.request")
    assert record.request_id == request_id
    assert record.status_code == 200
    assert record.path == "/ping"


def test_propagates_incoming_request_id():
    client = TestClient(build_app())

    response = client.get("/ping", headers={REQUEST_ID_HEADER: "req-123"})

    assert response.headers[REQUEST_ID_HEADER] == "req-123"


def test_request_logging_can_be_disabled(monkeypatch):
    monkeypatch.setenv("LOG_REQUESTS", "false")
    mock_app = MagicMock()

    add_request_logging_middleware(mock_app)

    mock_app.add_middleware.assert_not_called()


def test_request_logging_enabled_by_default(monkeypatch):
    monkeypatch.delenv("LOG_REQUESTS", raising=False)
    mock_app = MagicMock()

    add_request_logging_middleware(mock_app)

    mock_app.add_middleware.assert_called_once_with(RequestLoggingMiddleware)


def test_add_cors_middleware():
    mock_app = MagicMock()
    settings = get_settings()

    add_cors_middleware(mock_app, settings)

    call_kwargs = mock_app.add_middleware.call_args[1]
    assert call_kwargs["allow_origins"] == settings.cors_origins_list
    assert call_kwargs["allow_credentials"] is True
    assert call_kwargs["expose_headers"] == [REQUEST_ID_HEADER]


def test_cors_origins_list_parsing():
    settings = get_settings().model_copy(
        update={"cors_origins": " https://a.example , ,https://b.example"}
    )

    assert settings.cors_origins_list == ["https://a.example", "https://b.example"]
