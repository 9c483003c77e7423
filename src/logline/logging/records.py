"""Record types handed to the line formatter.

The logging pipeline owns record creation; the formatter only reads
these objects.

Classes:
    CallerInfo: Call site that emitted a record
    LogRecord: One structured log event
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import IO, Any, Dict, Optional

from .levels import Level


@dataclass(frozen=True)
class CallerInfo:
    """Call site of a log statement.

    Attributes:
        function: Qualified function name
        file: Source file path
        line: Line number within file
    """
    function: str
    file: str = ""
    line: int = 0


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class LogRecord:
    """Structured log event.

    Attributes:
        message: Log message; one trailing newline is dropped when rendered
        level: Record severity
        fields: Named values attached to the record
        timestamp: Instant the record was captured
        caller: Call site, present only when caller reporting is enabled
        buffer: Reusable output buffer owned by the pipeline
        stream: Output stream the pipeline writes to, probed for a terminal

    Example:
        >>> record = LogRecord(
        ...     "connection established",
        ...     level=Level.INFO,
        ...     fields={"host": "db01", "latency_ms": 12},
        ... )
    """
    message: str
    level: Level = Level.INFO
    fields: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_now)
    caller: Optional[CallerInfo] = None
    buffer: Optional[bytearray] = None
    stream: Optional[IO[Any]] = None

    def has_caller(self) -> bool:
        """Check whether the record carries call-site information."""
        return self.caller is not None
