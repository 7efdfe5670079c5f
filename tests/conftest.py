"""Shared fixtures for quickdoc tests."""

from __future__ import annotations

import logging
import os

import pytest

from quickdoc.schema.config import get_schema_options


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch):
    """Run each test without quickdoc settings from the environment."""
    for key in list(os.environ):
        if key.startswith("QUICKDOC_") or key in ("LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(key)
    get_schema_options.cache_clear()

    yield

    get_schema_options.cache_clear()
    # configure_logging() detaches the namespace; restore it for caplog
    logger = logging.getLogger("quickdoc")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
