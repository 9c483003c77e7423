"""Line formatter for logline.

This module renders one structured record into one human-readable line,
colorized when the output is a terminal:

    2024-05-01 10:30:45 CEST :: INFO :: connection established               host=db01 latency_ms=12

Classes:
    Color: ANSI color codes used by the formatter
    LineFormatter: Renders a LogRecord into bytes
    StdlibLineFormatter: logging.Formatter adapter around LineFormatter

Example:
    >>> formatter = LineFormatter(disable_timestamp=True, disable_colors=True)
    >>> formatter.format(LogRecord("hello", fields={"a": "1"})).split()
    [b'INFO', b'::', b'hello', b'a=1']
"""

import json
import logging
import string
import sys
import threading
from datetime import datetime
from enum import IntEnum
from typing import IO, Any, Dict, List, Optional

import structlog

from ..config.models import FormatterConfig
from .levels import Level, level_text_max_width
from .records import CallerInfo, LogRecord

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

# Minimum width of the message column.
MESSAGE_WIDTH = 44


class Color(IntEnum):
    """ANSI SGR codes."""

    FAINT = 2
    RED = 31
    YELLOW = 33
    BLUE = 36
    GRAY = 37


LEVEL_COLORS: Dict[Level, Color] = {
    Level.TRACE: Color.GRAY,
    Level.DEBUG: Color.GRAY,
    Level.INFO: Color.BLUE,
    Level.WARN: Color.YELLOW,
    Level.ERROR: Color.RED,
    Level.FATAL: Color.RED,
    Level.PANIC: Color.RED,
}

_SAFE_CHARS = frozenset(string.ascii_letters + string.digits + "-._/@^+")


def color_print(text: str, color: Optional[int]) -> str:
    """Wrap text in an ANSI color sequence.

    Args:
        text: Text to colorize
        color: SGR code; None or a non-positive code leaves text unchanged

    Returns:
        Colorized or original text
    """
    if color is not None and color > 0:
        return f"\x1b[{int(color)}m{text}\x1b[0m"
    return text


def is_terminal(stream: Optional[IO[Any]]) -> bool:
    """Check whether a stream is attached to a terminal."""
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (ValueError, OSError):
        # closed or detached stream
        return False


def platform_supports_color() -> bool:
    """Check whether terminals on this platform understand ANSI codes."""
    return sys.platform != "win32"


def stringify(value: Any) -> str:
    """Convert a field value to its display text.

    Strings are kept as they are, booleans render as true/false and None
    as null. Anything else goes through str(), falling back to
    the default object representation when str() itself fails.

    Args:
        value: Field value

    Returns:
        Display text
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


class LineFormatter:
    """Render structured records as single text lines.

    The formatter is safe to share between threads. The only state it
    keeps is derived on the first call to format() and never recomputed:
    whether the record's output stream is a terminal, and the width of
    the widest level name.

    Attributes:
        config: Formatter options

    Example:
        >>> formatter = LineFormatter(pad_level_text=True, force_quote=True)
        >>> line = formatter.format(LogRecord("started", level=Level.WARN))
    """

    def __init__(self, config: Optional[FormatterConfig] = None, **options: Any) -> None:
        """Initialize line formatter.

        Args:
            config: Formatter options
            **options: Individual options, applied on top of config

        Raises:
            ConfigurationError: If an option is unknown or invalid
        """
        if config is None:
            config = FormatterConfig.create(**options)
        elif options:
            config = config.update_from_dict(options)
        self.config: FormatterConfig = config

        self._logger = structlog.get_logger(__name__)
        self._init_lock = threading.Lock()
        self._initialized = False
        self._is_terminal = False
        self._level_text_max_width = 0

    @property
    def initialized(self) -> bool:
        """Whether the derived state has been computed."""
        return self._initialized

    @property
    def is_terminal(self) -> bool:
        """Whether the first record's output stream was a terminal."""
        return self._is_terminal

    @property
    def level_text_max_width(self) -> int:
        """Widest level name, 0 until the first record is formatted."""
        return self._level_text_max_width

    def _ensure_initialized(self, record: LogRecord) -> None:
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return
            if record.stream is not None:
                self._is_terminal = is_terminal(record.stream)
            self._level_text_max_width = level_text_max_width()
            self._initialized = True

        # Logged outside the lock: this formatter may sit behind the logger.
        self._logger.debug(
            "Line formatter initialized",
            is_terminal=self._is_terminal,
            level_text_max_width=self._level_text_max_width,
        )

    def is_colored(self) -> bool:
        """Check whether output lines are colorized."""
        colored = self.config.force_colors or (
            self._is_terminal and platform_supports_color()
        )
        return colored and not self.config.disable_colors

    def needs_quoting(self, text: str) -> bool:
        """Check whether a field value must be quoted.

        Args:
            text: Display text of the value

        Returns:
            True if the value is to be rendered as a quoted string
        """
        if self.config.force_quote:
            return True
        if self.config.disable_quote:
            return False
        return any(ch not in _SAFE_CHARS for ch in text)

    def format_value(self, value: Any) -> str:
        """Render a field value, quoting and escaping it when needed."""
        text = stringify(value)
        if not self.needs_quoting(text):
            return text
        return json.dumps(text, ensure_ascii=False)

    def sorted_keys(self, fields: Dict[str, Any]) -> List[str]:
        """Return field names in output order."""
        keys = list(fields)
        if self.config.disable_sorting:
            return keys

        if self.config.sorting_func is None:
            keys.sort()
        else:
            ordered = self.config.sorting_func(keys)
            if ordered is not None:
                keys = list(ordered)
        return keys

    def level_text(self, level: Level) -> str:
        """Render level text, truncated or padded as configured."""
        text = level.text.upper()
        if self.config.truncate_level_text and not self.config.pad_level_text:
            text = text[:4]
        if self.config.pad_level_text:
            text = text.ljust(self._level_text_max_width)
        return text

    def caller_text(self, caller: Optional[CallerInfo]) -> str:
        """Render the call-site annotation, e.g. " (main.run:42)"."""
        if caller is None:
            return ""

        if self.config.caller_formatter is not None:
            function_text, file_text = self.config.caller_formatter(caller)
        else:
            function_text, file_text = f"{caller.function}:{caller.line}", ""

        if not file_text:
            combined = function_text or ""
        elif not function_text:
            combined = file_text
        else:
            combined = f"{file_text} {function_text}"

        return f" ({combined})" if combined else ""

    def format_timestamp(self, timestamp: datetime) -> str:
        """Render a timestamp with the configured pattern."""
        return timestamp.strftime(self.config.timestamp_format or DEFAULT_TIMESTAMP_FORMAT)

    def format(self, record: LogRecord) -> bytes:
        """Format a record as one line.

        Args:
            record: Record to format

        Returns:
            UTF-8 encoded line ending in a newline. When the record carries
            a buffer, the line is appended to it and the whole buffer
            content is returned.
        """
        fields = dict(record.fields)
        keys = self.sorted_keys(fields)

        self._ensure_initialized(record)

        level_color: Optional[Color] = None
        separator = " :: "
        colored = self.is_colored()
        if colored:
            level_color = LEVEL_COLORS.get(record.level, Color.BLUE)
            separator = " "

        message = record.message
        if message.endswith("\n"):
            message = message[:-1]

        color_section = color_print(
            self.level_text(record.level) + self.caller_text(record.caller),
            level_color,
        )

        parts: List[str] = []
        if not self.config.disable_timestamp:
            timestamp = self.format_timestamp(record.timestamp)
            if colored:
                timestamp = color_print(timestamp, Color.FAINT)
            parts.extend((timestamp, separator))
        parts.extend((color_section, separator, message.ljust(MESSAGE_WIDTH), " "))

        for key in keys:
            parts.append(f" {color_print(key, level_color)}={self.format_value(fields[key])}")

        parts.append("\n")
        line = "".join(parts).encode("utf-8", "replace")

        if record.buffer is not None:
            record.buffer.extend(line)
            return bytes(record.buffer)
        return line

    def __repr__(self) -> str:
        """Return string representation of formatter."""
        return f"LineFormatter(config={self.config!r})"


class StdlibLineFormatter(logging.Formatter):
    """Standard library adapter for LineFormatter.

    Attributes passed through ``extra=`` become fields. The returned text
    has no trailing newline since the handler writes its own terminator;
    exception and stack information follow on separate lines.

    Example:
        >>> handler = ConsoleHandler()
        >>> handler.setFormatter(StdlibLineFormatter(pad_level_text=True))
        >>> logging.getLogger("app").info("ready", extra={"port": 8080})
    """

    # Attributes every logging.LogRecord has; everything else is a field
    RESERVED_ATTRS = frozenset({
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
        'filename', 'module', 'lineno', 'funcName', 'created',
        'msecs', 'relativeCreated', 'thread', 'threadName',
        'processName', 'process', 'message', 'exc_info', 'exc_text',
        'stack_info', 'asctime', 'taskName',
    })

    def __init__(
        self,
        config: Optional[FormatterConfig] = None,
        *,
        report_caller: bool = False,
        stream: Optional[IO[Any]] = None,
        **options: Any,
    ) -> None:
        """Initialize stdlib line formatter.

        Args:
            config: Formatter options
            report_caller: Annotate lines with function and line number
            stream: Output stream probed for a terminal; a ConsoleHandler
                fills this in when the formatter is attached to it
            **options: Individual formatter options
        """
        super().__init__()
        self.line_formatter = LineFormatter(config, **options)
        self.report_caller = report_caller
        self.stream = stream

    def to_line_record(self, record: logging.LogRecord) -> LogRecord:
        """Convert a standard library record.

        Args:
            record: Standard library log record

        Returns:
            Equivalent LogRecord
        """
        fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.RESERVED_ATTRS and not key.startswith("_")
        }

        caller = None
        if self.report_caller:
            caller = CallerInfo(
                function=record.funcName or "",
                file=record.pathname or "",
                line=record.lineno or 0,
            )

        return LogRecord(
            message=record.getMessage(),
            level=Level.from_stdlib(record.levelno),
            fields=fields,
            timestamp=datetime.fromtimestamp(record.created).astimezone(),
            caller=caller,
            stream=self.stream,
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a line.

        Args:
            record: Log record to format

        Returns:
            Formatted line without trailing newline
        """
        line = self.line_formatter.format(self.to_line_record(record))
        text = line.decode("utf-8")[:-1]

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            text += "\n" + record.exc_text
        if record.stack_info:
            text += "\n" + self.formatStack(record.stack_info)

        return text
