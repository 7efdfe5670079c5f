"""Tests for logging configuration module."""

from __future__ import annotations

import json
import logging
import os
import sys
from io import StringIO
from unittest.mock import patch

from quickdoc.logging_config import (
    JSONFormatter,
    TextFormatter,
    configure_logging,
    get_log_format,
    get_log_level,
)


def _record(name: str = "test", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="/path/to/file.py",
        lineno=42,
        msg="Message",
        args=(),
        exc_info=None,
    )


class TestGetLogLevel:
    """Tests for get_log_level function."""

    def test_default_is_warning(self) -> None:
        """Default log level should be WARNING for a library."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_log_level() == logging.WARNING

    def test_debug_level(self) -> None:
        """LOG_LEVEL=DEBUG should return logging.DEBUG."""
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            assert get_log_level() == logging.DEBUG

    def test_warn_alias(self) -> None:
        """LOG_LEVEL=WARN should work as alias for WARNING."""
        with patch.dict(os.environ, {"LOG_LEVEL": "WARN"}):
            assert get_log_level() == logging.WARNING

    def test_invalid_level_uses_default(self) -> None:
        """Invalid log level should fall back to the default."""
        with patch.dict(os.environ, {"LOG_LEVEL": "INVALID"}):
            assert get_log_level() == logging.WARNING
            assert get_log_level(default="INFO") == logging.INFO


class TestGetLogFormat:
    """Tests for get_log_format function."""

    def test_default_is_text(self) -> None:
        """Default log format should be text."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_log_format() == "text"

    def test_json_format_case_insensitive(self) -> None:
        """LOG_FORMAT=JSON should return json."""
        with patch.dict(os.environ, {"LOG_FORMAT": "JSON"}):
            assert get_log_format() == "json"

    def test_invalid_format_defaults_to_text(self) -> None:
        """Invalid log format should default to text."""
        with patch.dict(os.environ, {"LOG_FORMAT": "xml"}):
            assert get_log_format() == "text"


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_formats_as_valid_json(self) -> None:
        """Output should be valid JSON."""
        data = json.loads(JSONFormatter().format(_record(name="quickdoc.schema")))

        assert data["message"] == "Message"
        assert data["level"] == "INFO"
        assert data["logger"] == "quickdoc.schema"
        assert "timestamp" in data
        assert "source" not in data

    def test_includes_source_for_debug(self) -> None:
        """Debug logs should include source location."""
        data = json.loads(JSONFormatter().format(_record(level=logging.DEBUG)))

        assert data["source"]["line"] == 42
        assert data["source"]["file"] == "/path/to/file.py"

    def test_includes_extra_fields(self) -> None:
        """Fields passed through extra are collected."""
        record = _record()
        record.type_id = "pkg.Node"

        data = json.loads(JSONFormatter().format(record))

        assert data["extra"] == {"type_id": "pkg.Node"}


class TestTextFormatter:
    """Tests for text log formatter."""

    def test_shortens_logger_name(self) -> None:
        """Logger names under quickdoc should be shortened."""
        output = TextFormatter().format(_record(name="quickdoc.schema.builder"))

        assert "[schema.builder]" in output
        assert "quickdoc.schema.builder" not in output
        assert "INFO" in output

    def test_includes_source_for_error(self) -> None:
        """Error logs should include file:line."""
        output = TextFormatter().format(_record(level=logging.ERROR))

        assert "file.py:42" in output

    def test_source_stays_on_first_line_with_exception(self) -> None:
        """The traceback follows the located message line."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        first, _, rest = TextFormatter().format(record).partition("\n")

        assert first.endswith("Message (file.py:42)")
        assert "ValueError: boom" in rest


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configures_namespace_logger(self) -> None:
        """Should configure the quickdoc logger."""
        configure_logging(level=logging.DEBUG, format_type="text")

        logger = logging.getLogger("quickdoc")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, TextFormatter)
        assert logger.propagate is False

    def test_reads_from_environment(self) -> None:
        """Should read level and format from environment."""
        with patch.dict(os.environ, {"LOG_LEVEL": "ERROR", "LOG_FORMAT": "json"}):
            configure_logging()

        logger = logging.getLogger("quickdoc")
        assert logger.level == logging.ERROR
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_writes_to_stream(self) -> None:
        """Records from library modules reach the configured stream."""
        buffer = StringIO()
        configure_logging(level=logging.INFO, format_type="json", stream=buffer)

        logging.getLogger("quickdoc.schema.builder").info("Stream test")

        data = json.loads(buffer.getvalue().strip())
        assert data["message"] == "Stream test"
        assert data["logger"] == "quickdoc.schema.builder"

