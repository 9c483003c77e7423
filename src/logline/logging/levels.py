"""Log levels understood by the line formatter.

Levels are ordered by severity and numbered so that they line up with
the standard library's numeric levels, which keeps the stdlib bridge a
simple lookup.

Example:
    >>> Level.parse("WARN")
    <Level.WARN: 30>
    >>> Level.from_stdlib(logging.CRITICAL)
    <Level.FATAL: 50>
"""

import logging
from enum import IntEnum
from typing import Tuple

from ..core.exceptions import ValidationError


class Level(IntEnum):
    """Severity of a log record."""

    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL
    PANIC = 60

    @property
    def text(self) -> str:
        """Canonical lowercase name used when rendering."""
        return _LEVEL_TEXT[self]

    @classmethod
    def parse(cls, name: str) -> "Level":
        """Parse a level name.

        Args:
            name: Level name, case-insensitive ("warn" is accepted for WARN)

        Returns:
            Matching level

        Raises:
            ValidationError: If the name is not a known level
        """
        key = name.strip().lower()
        if key == "warn":
            return cls.WARN
        for level, text in _LEVEL_TEXT.items():
            if text == key:
                return level
        raise ValidationError(
            f"Unknown log level: {name}",
            code="UNKNOWN_LOG_LEVEL",
            context={"level": name},
        )

    @classmethod
    def from_stdlib(cls, levelno: int) -> "Level":
        """Map a standard library numeric level onto a Level.

        Picks the most severe level whose value does not exceed levelno,
        so anything below DEBUG is TRACE.

        Args:
            levelno: Numeric level from a logging.LogRecord

        Returns:
            Closest level
        """
        result = cls.TRACE
        for level in ALL_LEVELS:
            if level <= levelno:
                result = level
        return result

    def __str__(self) -> str:
        return self.text


_LEVEL_TEXT = {
    Level.TRACE: "trace",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
    Level.PANIC: "panic",
}

ALL_LEVELS: Tuple[Level, ...] = tuple(sorted(Level))


def level_text_max_width() -> int:
    """Return the widest level name, counted in code points."""
    return max(len(level.text) for level in ALL_LEVELS)
