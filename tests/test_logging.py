"""Tests for logging configuration."""

import io
import json
import logging
import sys
from unittest.mock import patch

from pcdb.config import Environment, Settings
from pcdb.logging_config import (
    DevFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


def _record(level: int = logging.INFO, msg: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="/app/module.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_format_basic_message(self) -> None:
        """Basic log message is formatted as JSON."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert data["file"] == "/app/module.py:42"
        assert "timestamp" in data

    def test_format_includes_request_context(self) -> None:
        """Request fields passed via extra are included."""
        record = _record(logging.ERROR, "Request failed")
        record.method = "GET"
        record.url = "https://api.test/indexes"
        record.status = 503

        data = json.loads(JSONFormatter().format(record))

        assert data["method"] == "GET"
        assert data["url"] == "https://api.test/indexes"
        assert data["status"] == 503

    def test_format_with_exception(self) -> None:
        """Exception info is included in JSON."""
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = _record(logging.ERROR, "Error")
        record.exc_info = exc_info

        data = json.loads(JSONFormatter().format(record))
        assert "ValueError" in data["exception"]


class TestDevFormatter:
    """Tests for development formatter."""

    def test_format_includes_level(self) -> None:
        """Development format includes level and logger name."""
        output = DevFormatter().format(_record(logging.WARNING, "Warning message"))

        assert "WARNING" in output
        assert "test" in output
        assert "Warning message" in output

    def test_format_appends_request_context(self) -> None:
        """Request fields are appended after the message."""
        record = _record(logging.ERROR, "Request failed")
        record.method = "DELETE"
        record.status = 404

        output = DevFormatter().format(record)

        assert output.endswith("| method=DELETE status=404")


class TestSetupLogging:
    """Tests for logging setup."""

    def test_returns_package_logger(self) -> None:
        """setup_logging returns the client's logger."""
        logger = setup_logging(level="INFO", json_output=False)
        assert logger is logging.getLogger("pcdb")
        assert logger.propagate is False

    def test_root_logger_untouched(self) -> None:
        """The application's root handlers are left alone."""
        root = logging.getLogger()
        handlers = list(root.handlers)

        setup_logging(level="DEBUG", json_output=True)

        assert root.handlers == handlers

    def test_uses_json_in_production(self) -> None:
        """JSON output is used in production environment."""
        mock_settings = Settings(environment=Environment.PRODUCTION)

        with patch("pcdb.logging_config.get_settings", return_value=mock_settings):
            logger = setup_logging()

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_uses_dev_formatter_in_development(self) -> None:
        """Dev formatter is used in development environment."""
        mock_settings = Settings(environment=Environment.DEVELOPMENT)

        with patch("pcdb.logging_config.get_settings", return_value=mock_settings):
            logger = setup_logging()

        assert isinstance(logger.handlers[0].formatter, DevFormatter)

    def test_level_override(self) -> None:
        """Log level can be overridden."""
        logger = setup_logging(level="DEBUG", json_output=False)
        assert logger.level == logging.DEBUG

    def test_transport_records_reach_stream(self) -> None:
        """Records from child loggers are written with request context."""
        stream = io.StringIO()
        setup_logging(level="ERROR", json_output=True, stream=stream)

        get_logger("pcdb.http").error(
            "Service returned 500",
            extra={"method": "POST", "url": "https://idx.test/query", "status": 500},
        )

        data = json.loads(stream.getvalue())
        assert data["logger"] == "pcdb.http"
        assert data["status"] == 500


class TestGetLogger:
    """Tests for named logger retrieval."""

    def test_returns_named_logger(self) -> None:
        """get_logger returns a logger with the given name."""
        logger = get_logger("pcdb.services")
        assert logger.name == "pcdb.services"
