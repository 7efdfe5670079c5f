"""Logging configuration for quickdoc.

Configurable via environment variables:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR). Default: WARNING
- LOG_FORMAT: Set format ('text' or 'json'). Default: text

The library only emits records under the ``quickdoc`` logger; the command line
opts in to output by calling ``configure_logging()``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import IO, Any

LOGGER_NAMESPACE = "quickdoc"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "shortname",
}

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_SOURCE_LEVELS = (logging.DEBUG, logging.ERROR, logging.CRITICAL)


class JSONFormatter(logging.Formatter):
    """Formats records as single JSON lines.

    Debug and error records also carry their source location.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.levelno in _SOURCE_LEVELS:
            log_data["source"] = {"file": record.pathname, "line": record.lineno}
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES
        }
        if extra:
            log_data["extra"] = extra
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Format: TIMESTAMP LEVEL [LOGGER] MESSAGE, logger relative to quickdoc."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)-8s [%(shortname)s] %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        record.shortname = record.name.removeprefix(f"{LOGGER_NAMESPACE}.")
        text = super().format(record)
        if record.levelno in _SOURCE_LEVELS:
            # exception text, when present, follows the first line
            first, sep, rest = text.partition("\n")
            text = f"{first} ({record.filename}:{record.lineno}){sep}{rest}"
        return text


def get_log_level(default: str = "WARNING") -> int:
    """Get log level from the LOG_LEVEL environment variable.

    Args:
        default: Level name used when LOG_LEVEL is unset or invalid.

    Returns:
        Logging level constant (e.g., logging.INFO).
    """
    level_name = os.environ.get("LOG_LEVEL", default).upper()
    return _LEVELS.get(level_name, _LEVELS[default.upper()])


def get_log_format() -> str:
    """Get log format ('text' or 'json') from the LOG_FORMAT environment variable."""
    format_name = os.environ.get("LOG_FORMAT", "text").lower()
    if format_name not in ("text", "json"):
        return "text"
    return format_name


def configure_logging(
    level: int | None = None,
    format_type: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Route the quickdoc logger namespace to a single stream handler.

    Args:
        level: Log level. If None, reads from LOG_LEVEL env var.
        format_type: Output format ('text' or 'json').
                     If None, reads from LOG_FORMAT env var.
        stream: Destination stream. Defaults to stderr.
    """
    if level is None:
        level = get_log_level()
    if format_type is None:
        format_type = get_log_format()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JSONFormatter() if format_type == "json" else TextFormatter())

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False

    root_logger.debug(
        "Logging configured: level=%s, format=%s",
        logging.getLevelName(level),
        format_type,
    )
