"""Tests for shared/logging_config.py."""

import json
import logging
import sys

import structlog

from shared.config import Settings
from shared.logging_config import (
    bind_request_id,
    build_formatter,
    configure_logging,
    current_request_id,
    log_auth_event,
    unbind_request_id,
)


def make_record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("mockapi.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class ListHandler(logging.Handler):
    def __init__(self, formatter: logging.Formatter):
        super().__init__()
        self.setFormatter(formatter)
        self.lines: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(self.format(record))


class TestRequestIdBinding:
    def test_bind_and_unbind(self):
        tokens = bind_request_id("req-123")
        try:
            assert current_request_id() == "req-123"
        finally:
            unbind_request_id(tokens)
        assert current_request_id() is None

    def test_request_id_reaches_json_output(self):
        tokens = bind_request_id("req-456")
        try:
            payload = json.loads(build_formatter(json_output=True).format(make_record()))
        finally:
            unbind_request_id(tokens)
        assert payload["request_id"] == "req-456"

    def test_absent_outside_request(self):
        payload = json.loads(build_formatter(json_output=True).format(make_record()))
        assert "request_id" not in payload

    def test_request_logs_carry_header_id(self, client):
        handler = ListHandler(build_formatter(json_output=True))
        logger = logging.getLogger("mockapi.http")
        previous_level = logger.level
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        try:
            response = client.get("/health", headers={"X-Request-ID": "trace-789"})
        finally:
            logger.removeHandler(handler)
            logger.setLevel(previous_level)

        assert response.headers["X-Request-ID"] == "trace-789"
        completed = [json.loads(line) for line in handler.lines]
        completed = [entry for entry in completed if entry["event"] == "Request completed"]
        assert completed
        assert completed[-1]["request_id"] == "trace-789"
        assert completed[-1]["path"] == "/health"


class TestFormatters:
    def test_console_includes_extras(self):
        line = build_formatter(json_output=False).format(make_record(user_id="user_1", duration_ms=12))
        assert "hello" in line
        assert "user_id=user_1" in line
        assert "duration_ms=12" in line

    def test_json(self):
        payload = json.loads(build_formatter(json_output=True).format(make_record(user_id="user_1")))
        assert payload["event"] == "hello"
        assert payload["level"] == "info"
        assert payload["logger"] == "mockapi.test"
        assert payload["user_id"] == "user_1"
        assert "timestamp" in payload

    def test_json_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "mockapi.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        payload = json.loads(build_formatter(json_output=True).format(record))
        assert "RuntimeError: boom" in payload["exception"]


class TestConfigureLogging:
    def test_installs_single_handler(self):
        root = logging.getLogger()
        before = len(root.handlers)
        configure_logging(Settings(environment="test"))
        configure_logging(Settings(environment="test", log_json=True))
        ours = [h for h in root.handlers if getattr(h, "_mockapi_handler", False)]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert len(root.handlers) <= before + 1
        root.removeHandler(ours[0])


class TestLogAuthEvent:
    def test_success_logs_info(self, caplog):
        logger = logging.getLogger("mockapi.test.auth")
        with caplog.at_level(logging.INFO, logger="mockapi.test.auth"):
            log_auth_event(logger, "login_success", "user_1", True, email="admin@banedonv.com")
        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.getMessage() == "Auth event: login_success"
        assert record.auth_event == "login_success"
        assert record.user_id == "user_1"
        assert record.email == "admin@banedonv.com"

    def test_failure_logs_warning(self, caplog):
        logger = logging.getLogger("mockapi.test.auth")
        with caplog.at_level(logging.INFO, logger="mockapi.test.auth"):
            log_auth_event(logger, "login_attempt", None, False, reason="invalid_password")
        assert caplog.records[-1].levelno == logging.WARNING
