"""logline line formatting.

This package renders structured log records as single human-readable
lines and plugs the formatter into the standard library logging module
and into structlog.

Classes:
    Level: Record severity
    LogRecord: One structured log event
    CallerInfo: Call site of a log statement
    LineFormatter: Renders a LogRecord into bytes
    StdlibLineFormatter: logging.Formatter adapter
    ConsoleHandler: Stream handler sharing its stream with the formatter
    LineRenderer: structlog processor
    LoggerFactory: Pipeline configuration

Example:
    >>> from logline.logging import LineFormatter, LogRecord, Level
    >>> formatter = LineFormatter(disable_colors=True)
    >>> line = formatter.format(LogRecord("ready", level=Level.INFO, fields={"port": 8080}))
"""

from .factory import LoggerFactory, configure_logging, get_factory, get_logger, shutdown_logging
from .formatters import Color, LineFormatter, StdlibLineFormatter
from .handlers import ConsoleHandler
from .levels import ALL_LEVELS, Level
from .records import CallerInfo, LogRecord
from .structured import LineRenderer

__all__ = [
    # Records
    "Level",
    "ALL_LEVELS",
    "LogRecord",
    "CallerInfo",
    
    # Formatting
    "Color",
    "LineFormatter",
    "StdlibLineFormatter",
    "LineRenderer",
    
    # Handlers
    "ConsoleHandler",
    
    # Factory and configuration
    "LoggerFactory",
    "configure_logging",
    "get_logger",
    "get_factory",
    "shutdown_logging",
]
