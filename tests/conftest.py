"""Pytest configuration and shared fixtures.

This module provides pytest configuration and shared fixtures for all tests
in the logline test suite.
"""

import io
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Generator
from unittest.mock import MagicMock

import pytest
import structlog

from logline.logging.levels import Level
from logline.logging.records import LogRecord

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _configure_test_structlog() -> None:
    # Loggers are not cached so structlog.testing.capture_logs sees them.
    structlog.configure(
        processors=[structlog.testing.LogCapture()],
        logger_factory=structlog.testing.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Configure test logging to suppress noise during tests
_configure_test_structlog()


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Restore structlog and root logger state after each test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    from logline.logging.factory import get_factory
    get_factory().shutdown()

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()
    _configure_test_structlog()


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed, timezone-aware instant."""
    return datetime(2024, 5, 1, 10, 30, 45, tzinfo=timezone(timedelta(hours=2), "CEST"))


@pytest.fixture
def text_stream() -> io.StringIO:
    """An in-memory stream that is not a terminal."""
    return io.StringIO()


@pytest.fixture
def tty_stream() -> MagicMock:
    """A stream that reports being a terminal."""
    stream = MagicMock()
    stream.isatty.return_value = True
    return stream


@pytest.fixture
def make_record(fixed_time):
    """Factory for LogRecord instances with a fixed timestamp."""
    def _make(message: str = "hello", level: Level = Level.INFO, **kwargs):
        kwargs.setdefault("timestamp", fixed_time)
        return LogRecord(message, level=level, **kwargs)

    return _make


@pytest.fixture
def strip_ansi():
    """Function removing ANSI color sequences from text."""
    return lambda text: ANSI_ESCAPE.sub("", text)
