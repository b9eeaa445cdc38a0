"""Tests for Schoolgate structured logging."""

import json
import logging

from schoolgate.logging import SchoolgateFormatter, configure_logging, get_logger


def _record(name="schoolgate.dispatch", level=logging.INFO, msg="Operation dispatched"):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSchoolgateFormatter:
    def test_human_readable_format(self):
        output = SchoolgateFormatter(json_output=False).format(_record())
        assert "schoolgate.dispatch" in output
        assert "Operation dispatched" in output
        assert "INFO" in output

    def test_json_format(self):
        output = SchoolgateFormatter(json_output=True).format(
            _record(name="schoolgate.catalog", level=logging.WARNING, msg="Skipping delUser")
        )
        data = json.loads(output)
        assert data["logger"] == "schoolgate.catalog"
        assert data["message"] == "Skipping delUser"
        assert data["level"] == "WARNING"
        assert "timestamp" in data

    def test_context_fields(self):
        record = _record()
        record.operation = "getAbsents"  # type: ignore[attr-defined]
        record.outcome = "success"  # type: ignore[attr-defined]
        output = SchoolgateFormatter(json_output=False).format(record)
        assert "operation=getAbsents" in output
        assert "outcome=success" in output

    def test_context_fields_in_json(self):
        record = _record()
        record.risk_tier = "critical"  # type: ignore[attr-defined]
        record.param_keys = ["userIdentifier"]  # type: ignore[attr-defined]
        data = json.loads(SchoolgateFormatter(json_output=True).format(record))
        assert data["risk_tier"] == "critical"
        assert data["param_keys"] == ["userIdentifier"]

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = logging.LogRecord(
                name="schoolgate", level=logging.ERROR, pathname="test.py", lineno=1,
                msg="failed", args=(), exc_info=sys.exc_info(),
            )
        output = SchoolgateFormatter(json_output=False).format(record)
        assert "ValueError: boom" in output


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("schoolgate.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "schoolgate.test"

    def test_default_name(self):
        assert get_logger().name == "schoolgate"


class TestConfigureLogging:
    def test_configure_debug(self):
        configure_logging(level="DEBUG")
        assert get_logger("schoolgate").level == logging.DEBUG
        configure_logging(level="INFO")
        assert get_logger("schoolgate").level == logging.INFO

    def test_configure_json(self):
        configure_logging(json_output=True)
        logger = get_logger("schoolgate")
        assert len(logger.handlers) == 1
        formatter = logger.handlers[0].formatter
        assert isinstance(formatter, SchoolgateFormatter)
        assert formatter._json_output is True
        configure_logging(json_output=False)

    def test_does_not_propagate(self):
        configure_logging()
        assert get_logger("schoolgate").propagate is False
