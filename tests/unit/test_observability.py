"""Tests for structured JSON logging."""

import json
import logging

from fieldreport.observability.logging import (
    JSONFormatter,
    correlation_id,
    get_correlation_id,
    setup_logging,
)


def _record(msg: str = "test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="fieldreport.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_required_fields(self):
        parsed = json.loads(JSONFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "fieldreport.test"
        assert parsed["message"] == "test message"
        assert "timestamp" in parsed

    def test_includes_correlation_id(self):
        token = correlation_id.set("req-123")
        try:
            parsed = json.loads(JSONFormatter().format(_record()))
        finally:
            correlation_id.reset(token)
        assert parsed["correlation_id"] == "req-123"

    def test_no_correlation_id_by_default(self):
        parsed = json.loads(JSONFormatter().format(_record()))
        assert "correlation_id" not in parsed
        assert get_correlation_id() == ""

    def test_extra_fields(self):
        output = JSONFormatter().format(_record(rows=12, warnings=2, endpoint="https://sheet"))
        parsed = json.loads(output)
        assert parsed["rows"] == 12
        assert parsed["warnings"] == 2
        assert parsed["endpoint"] == "https://sheet"

    def test_unlisted_extra_not_emitted(self):
        parsed = json.loads(JSONFormatter().format(_record(step="fetch", rows=3)))
        assert "step" not in parsed
        assert parsed["rows"] == 3

    def test_arabic_not_escaped(self):
        output = JSONFormatter().format(_record("دوار تيزي"))
        assert "دوار تيزي" in output


class TestSetupLogging:
    def test_json_handler(self):
        setup_logging(json_format=True, level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_text_handler(self):
        setup_logging(json_format=False)
        root = logging.getLogger()
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.INFO
