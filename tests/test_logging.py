"""Tests for logging configuration."""

import json
import logging
import sys
from contextlib import contextmanager

import pytest

from jwtdemo.core.logging import (
    REDACTED,
    JSONFormatter,
    RedactingFilter,
    get_logger,
    redact,
    setup_logging,
)


@contextmanager
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield
    finally:
        root.handlers = handlers
        root.setLevel(level)


def _record(message: str, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="jwtdemo.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=exc_info,
    )


class TestJSONFormatter:
    def test_fields(self):
        entry = json.loads(JSONFormatter().format(_record("hello")))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "jwtdemo.test"
        assert entry["message"] == "hello"
        assert "timestamp" in entry

    def test_escapes_special_characters(self):
        message = 'quote " backslash \\ newline \n end'
        entry = json.loads(JSONFormatter().format(_record(message)))
        assert entry["message"] == message

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record("failed", exc_info=sys.exc_info())
        entry = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]


class TestSetupLogging:
    def test_structured(self):
        with restore_root_logger():
            setup_logging(level="DEBUG", format_type="structured")
            root = logging.getLogger()
            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_dev_quiets_uvicorn(self):
        with restore_root_logger():
            setup_logging(level="INFO", format_type="dev")
            assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING


def test_get_logger_prefix():
    assert get_logger("client").name == "jwtdemo.client"


class TestRedaction:
    def test_jwt_masked(self, token_service):
        token = token_service.issue(1, "Max")
        assert token not in redact(f"stored token {token}")
        assert REDACTED in redact(f"stored token {token}")

    def test_bearer_header_masked(self):
        assert redact("Authorization: Bearer abc123") == f"Authorization: Bearer {REDACTED}"

    @pytest.mark.parametrize(
        "message",
        ["password=777", "{'password': '777'}", '{"password": "777"}', "Password: 777"],
    )
    def test_password_masked(self, message):
        cleaned = redact(message)
        assert "777" not in cleaned
        assert REDACTED in cleaned

    def test_plain_message_untouched(self):
        assert redact("User logged in: Max") == "User logged in: Max"

    def test_filter_rewrites_formatted_message(self):
        record = _record("login with %s")
        record.args = ("password=hunter22",)
        assert RedactingFilter().filter(record) is True
        assert record.getMessage() == f"login with password={REDACTED}"

    def test_handler_installs_filter(self):
        with restore_root_logger():
            setup_logging(level="INFO", format_type="structured")
            handler = logging.getLogger().handlers[0]
            assert any(isinstance(f, RedactingFilter) for f in handler.filters)
