"""
Schoolgate Structured Logging

Provides a configured logger for the Schoolgate tool layer using stdlib
logging with structured context. Output goes to stderr so that a host
speaking a protocol over stdout is never disturbed.

Usage:
    from schoolgate.logging import get_logger

    logger = get_logger("schoolgate.dispatch")
    logger.info("Operation dispatched", extra={"operation": "getAbsents", "outcome": "success"})

For production, configure with JSON output:
    from schoolgate.logging import configure_logging
    configure_logging(json_output=True, level="INFO")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_CONTEXT_FIELDS = (
    "operation",
    "risk_tier",
    "outcome",
    "state",
    "duration_ms",
    "param_keys",
    "reason",
)


class SchoolgateFormatter(logging.Formatter):
    """Structured log formatter for Schoolgate.

    Outputs either human-readable or JSON format depending on configuration.
    """

    def __init__(self, json_output: bool = False):
        super().__init__()
        self._json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self._json_output:
            return json.dumps(log_data, default=str)

        extra_keys = {
            k: v
            for k, v in log_data.items()
            if k not in ("timestamp", "level", "logger", "message", "exception")
        }
        extra_str = ""
        if extra_keys:
            extra_str = " | " + " ".join(f"{k}={v}" for k, v in extra_keys.items())

        line = f"[{log_data['timestamp']}] {record.levelname:8s} {record.name}: {record.getMessage()}{extra_str}"
        if "exception" in log_data:
            line += "\n" + log_data["exception"]
        return line


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """Configure Schoolgate logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output JSON format (for log shipping).
    """
    root_logger = logging.getLogger("schoolgate")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(SchoolgateFormatter(json_output=json_output))
    root_logger.addHandler(handler)

    root_logger.propagate = False


def get_logger(name: str = "schoolgate") -> logging.Logger:
    """Get a Schoolgate logger instance.

    Args:
        name: Logger name (usually module path like "schoolgate.dispatch").
    """
    return logging.getLogger(name)


configure_logging()
