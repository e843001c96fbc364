"""Tests for accounts/core/logging.py - formatter and configuration."""

import json
import logging

import pytest

from accounts.core.logging import JsonFormatter, configure_logging, env_bool


@pytest.mark.parametrize(
    ("raw", "expected"), [("1", True), ("Yes", True), ("off", False), ("", False)]
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SOME_FLAG", raw)

    assert env_bool("SOME_FLAG", default=not expected) is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("SOME_FLAG", raising=False)

    assert env_bool("SOME_FLAG", default=True) is True


def test_json_formatter_includes_known_extras():
    record = logging.LogRecord(
        name="accounts.user",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Created user %s",
        args=(7,),
        exc_info=None,
    )
    record.user_id = 7
    record.request_id = "abc"
    record.unrelated = "ignored"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "Created user 7"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "accounts.user"
    assert payload["user_id"] == 7
    assert payload["request_id"] == "abc"
    assert "unrelated" not in payload


def test_configure_logging_json(monkeypatch):
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    configure_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)

    monkeypatch.delenv("LOG_JSON")
    monkeypatch.delenv("LOG_LEVEL")
    configure_logging()
