"""structlog integration for logline.

This module provides a structlog processor that renders event
dictionaries through LineFormatter, for applications that configure
structlog to write directly to a stream.

Classes:
    LineRenderer: Final structlog processor producing formatted lines

Example:
    >>> structlog.configure(
    ...     processors=[
    ...         structlog.processors.add_log_level,
    ...         LineRenderer(pad_level_text=True),
    ...     ],
    ...     logger_factory=structlog.WriteLoggerFactory(),
    ... )
    >>> structlog.get_logger().info("Analysis started", table_count=150)
"""

import sys
from datetime import datetime
from typing import IO, Any, Dict, Optional

from ..config.models import FormatterConfig
from ..core.exceptions import ValidationError
from .formatters import LineFormatter
from .levels import Level
from .records import CallerInfo, LogRecord

# structlog method names that are not level names
_METHOD_LEVELS = {
    "critical": Level.FATAL,
    "exception": Level.ERROR,
    "msg": Level.INFO,
    "log": Level.INFO,
}

# Keys added by structlog.processors.CallsiteParameterAdder that form the caller
_CALLSITE_KEYS = ("func_name", "pathname", "filename")


class LineRenderer:
    """Render structlog event dictionaries as logline lines.

    The event dictionary maps onto a record as follows: ``event`` is the
    message, ``level`` (or the logging method name) the level, a datetime
    under ``timestamp`` the timestamp (the current time otherwise), and
    call-site keys from CallsiteParameterAdder the caller when
    ``report_caller`` is set. All other keys become fields.

    The returned line has no trailing newline; structlog's loggers add
    their own.

    Attributes:
        formatter: Underlying line formatter
        stream: Stream the structlog logger writes to
        report_caller: Whether call-site keys are turned into the caller
    """

    def __init__(
        self,
        config: Optional[FormatterConfig] = None,
        *,
        stream: Optional[IO[Any]] = None,
        report_caller: bool = False,
        **options: Any,
    ) -> None:
        """Initialize line renderer.

        Args:
            config: Formatter options
            stream: Output stream probed for a terminal, sys.stdout by
                default (structlog's default output)
            report_caller: Read ``func_name``, ``lineno`` and ``pathname``
                as the caller instead of as fields; pair with
                CallsiteParameterAdder
            **options: Individual formatter options
        """
        self.formatter = LineFormatter(config, **options)
        self.stream = stream if stream is not None else sys.stdout
        self.report_caller = report_caller

    def __call__(self, logger: Any, method_name: str, event_dict: Dict[str, Any]) -> str:
        """Render an event dictionary.

        Args:
            logger: Wrapped logger (unused)
            method_name: Name of the logging method that was called
            event_dict: Event dictionary

        Returns:
            Formatted line without trailing newline
        """
        event_dict = dict(event_dict)
        message = str(event_dict.pop("event", ""))
        level = self._resolve_level(event_dict.pop("level", None), method_name)

        timestamp = event_dict.get("timestamp")
        if isinstance(timestamp, datetime):
            del event_dict["timestamp"]
        else:
            timestamp = datetime.now().astimezone()

        caller = self._pop_caller(event_dict)
        record = LogRecord(
            message=message,
            level=level,
            fields=event_dict,
            timestamp=timestamp,
            caller=caller,
            stream=self.stream,
        )
        return self.formatter.format(record).decode("utf-8")[:-1]

    @staticmethod
    def _resolve_level(level: Any, method_name: str) -> Level:
        for name in (level, method_name):
            if not isinstance(name, str):
                continue
            if name.lower() in _METHOD_LEVELS:
                return _METHOD_LEVELS[name.lower()]
            try:
                return Level.parse(name)
            except ValidationError:
                continue
        return Level.INFO

    def _pop_caller(self, event_dict: Dict[str, Any]) -> Optional[CallerInfo]:
        if not self.report_caller:
            return None

        # A non-integer lineno is not call-site data; it stays a field
        line = event_dict.get("lineno")
        if isinstance(line, int) and not isinstance(line, bool):
            del event_dict["lineno"]
        elif "func_name" in event_dict:
            line = 0
        else:
            return None

        callsite = {key: event_dict.pop(key) for key in _CALLSITE_KEYS if key in event_dict}
        return CallerInfo(
            function=str(callsite.get("func_name", "")),
            file=str(callsite.get("pathname") or callsite.get("filename") or ""),
            line=line,
        )
