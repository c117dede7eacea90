# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging
import sys

from adrgen.logging.context import set_adr_context, set_page_context, set_request_context
from adrgen.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "Hello", level: int = logging.INFO, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="adrgen.test", level=level, pathname="", lineno=0,
        msg=msg, args=(), exc_info=exc_info,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert parsed["logger"] == "adrgen.test"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_adr_context("0007")
        set_page_context("adr")
        parsed = json.loads(JsonFormatter().format(_record("parsed")))
        assert parsed["context"] == {"adr_number": "0007", "page": "adr"}

    def test_format_with_extra_data(self):
        record = _record()
        record.data = {"pages": 5}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"pages": 5}

    def test_format_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record("failed", logging.ERROR, exc_info=sys.exc_info())
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in parsed["exception"]


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output
        assert "adrgen.test" in output

    def test_format_includes_context(self):
        set_request_context("abc123")
        set_adr_context("0002")
        output = TextFormatter().format(_record())
        assert "<abc123>" in output
        assert "(ADR-0002)" in output


class TestGetLogger:
    def test_returns_namespaced_logger(self):
        logger = get_logger("test_module")
        assert logger.name == "adrgen.test_module"


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger("adrgen").handlers.clear()

    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("adrgen")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("adrgen")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_does_not_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("adrgen").handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "adrgen.log"
        setup_logging(log_file=log_file)
        root = logging.getLogger("adrgen")
        assert len(root.handlers) == 2
        root.info("written to file")
        for handler in root.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")
        for handler in root.handlers:
            handler.close()
