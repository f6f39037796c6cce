"""Unit tests for construct_engine.logging_config."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from construct_engine.logging_config import JSONFormatter, configure_logging


def _record(msg: str = "hello %s", args: tuple = ("world",), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="construct_engine.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


class TestJSONFormatter:
    def test_single_line_json(self):
        line = JSONFormatter().format(_record())
        payload = json.loads(line)
        assert "\n" not in line
        assert payload["level"] == "INFO"
        assert payload["logger"] == "construct_engine.test"
        assert payload["message"] == "hello world"
        assert "timestamp" in payload
        assert "exc_info" not in payload

    def test_includes_exception(self):
        try:
            raise ValueError("bad")
        except ValueError:
            record = _record(exc_info=sys.exc_info())
        payload = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad" in payload["exc_info"]


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_structured_handler(self):
        handler = configure_logging("INFO", structured=True)
        root = logging.getLogger()
        assert root.handlers == [handler]
        assert isinstance(handler.formatter, JSONFormatter)
        assert root.level == logging.INFO

    def test_text_handler(self):
        handler = configure_logging(logging.DEBUG)
        assert not isinstance(handler.formatter, JSONFormatter)
        assert logging.getLogger().level == logging.DEBUG
