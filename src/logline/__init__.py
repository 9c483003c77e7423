"""logline - human-readable line formatting for structured logs.

logline renders a structured log record (timestamp, level, message,
key-value fields and an optional call site) as one text line, colorized
when written to a terminal.

Modules:
    core: Exception hierarchy
    config: Formatter and pipeline configuration
    logging: Line formatter and logging pipeline integration

Example:
    >>> from logline.logging import configure_logging, get_logger
    >>> configure_logging(level="INFO", pad_level_text=True)
    >>> logger = get_logger(__name__)
    >>> logger.info("Service started", port=8080)
"""

from . import core, config, logging

__version__ = "0.1.0"
__title__ = "logline"
__description__ = "Human-readable line formatter for structured logs"
__author__ = "logline Team"
__license__ = "MIT"

__all__ = [
    "core",
    "config",
    "logging",
    "__version__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
]
