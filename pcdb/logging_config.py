"""Structured logging for the client.

The package only emits records under the ``pcdb`` logger tree. Transport
failures carry ``method``, ``url`` and ``status`` through ``extra=``.
Applications that do not configure logging themselves can call
``setup_logging`` to get JSON output in production and readable output in
development.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from pcdb.config import Environment, get_settings

PACKAGE_LOGGER = "pcdb"

# Fields transport records attach via ``extra=``
REQUEST_FIELDS = ("method", "url", "status")


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in REQUEST_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        if record.pathname:
            log_data["file"] = f"{record.pathname}:{record.lineno}"

        return json.dumps(log_data, default=str, ensure_ascii=False)


class DevFormatter(logging.Formatter):
    """Human-readable formatter for development.

    Request fields, when present, are appended after the message.
    """

    FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self) -> None:
        super().__init__(fmt=self.FORMAT, datefmt=self.DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        output = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in REQUEST_FIELDS
            if getattr(record, key, None) is not None
        ]
        if context:
            output = f"{output} | {' '.join(context)}"
        return output


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a handler to the client's logger tree.

    The root logger of the embedding application is left untouched.

    Args:
        level: Log level override (default from settings).
        json_output: Force JSON output (default based on environment).
        stream: Output stream (default stderr).

    Returns:
        The ``pcdb`` logger.
    """
    settings = get_settings()

    log_level = level or settings.log_level
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if json_output is None:
        json_output = settings.environment != Environment.DEVELOPMENT

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter() if json_output else DevFormatter())

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.propagate = False

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
