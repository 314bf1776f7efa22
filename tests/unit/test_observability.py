"""Unit tests for logging setup."""

import io
import json
import logging
from pathlib import Path
import sys

import pytest

from search_keys.observability import JsonFormatter, configure_logging


def _record(msg: str = "test message", name: str = "search_keys.keys", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_basic_fields(self):
        payload = json.loads(JsonFormatter().format(_record()))
        assert payload["message"] == "test message"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "search_keys.keys"
        assert payload["component"] == "keys"
        assert "timestamp" in payload

    def test_extra_fields_are_included(self):
        payload = json.loads(JsonFormatter().format(_record(key_separator="|", components=3)))
        assert payload["key_separator"] == "|"
        assert payload["components"] == 3

    def test_secret_fields_are_redacted(self):
        payload = json.loads(JsonFormatter().format(_record(api_key="abc", password="pw")))
        assert payload["api_key"] == "[REDACTED]"
        assert payload["password"] == "[REDACTED]"

    def test_long_values_are_truncated(self):
        payload = json.loads(JsonFormatter().format(_record(msg="x" * 3000, blob="y" * 600)))
        assert payload["message"].endswith("...")
        assert len(payload["message"]) == JsonFormatter.MAX_MESSAGE_LEN + 3
        assert payload["blob"] == "y" * 500 + "..."

    def test_non_json_values_use_fallback(self):
        payload = json.loads(
            JsonFormatter().format(_record(path=Path("/tmp/x"), tags={"b", "a"}, raw=b"bytes", err=ValueError("bad")))
        )
        assert payload["path"] == "/tmp/x"
        assert payload["tags"] == ["a", "b"]
        assert payload["raw"] == "bytes"
        assert payload["err"] == "bad"

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        payload = json.loads(JsonFormatter().format(record))
        assert "ValueError: boom" in payload["exception"]


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_json_output(self):
        stream = io.StringIO()
        configure_logging("info", json_output=True, stream=stream)
        logging.getLogger("search_keys.test").info("hello", extra={"field": "body"})

        payload = json.loads(stream.getvalue().strip())
        assert payload["message"] == "hello"
        assert payload["field"] == "body"

    def test_plain_output_replaces_handlers(self):
        stream = io.StringIO()
        configure_logging("warning", json_output=False, stream=stream)
        configure_logging("warning", json_output=False, stream=stream)

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        logging.getLogger("search_keys.test").warning("careful")
        assert "WARNING [search_keys.test] careful" in stream.getvalue()

    def test_logger_level_overrides(self):
        configure_logging("warning", stream=io.StringIO(), logger_levels={"search_keys.keys": "debug"})
        assert logging.getLogger("search_keys.keys").level == logging.DEBUG
        logging.getLogger("search_keys.keys").setLevel(logging.NOTSET)

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("chatty", stream=io.StringIO())
        assert logging.getLogger().level == logging.INFO
