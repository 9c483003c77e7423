"""Console handler for the logline standard library bridge.

Classes:
    ConsoleHandler: Stream handler that shares its stream with the formatter

Example:
    >>> handler = ConsoleHandler()
    >>> handler.setFormatter(StdlibLineFormatter())
    >>> logging.getLogger().addHandler(handler)
"""

import logging
import sys
from typing import IO, Any, Optional

from .formatters import StdlibLineFormatter


class ConsoleHandler(logging.StreamHandler):
    """Stream handler writing formatted lines to a console stream.

    Writes to stderr unless another stream is given. When a
    StdlibLineFormatter without its own stream is attached, the handler
    hands it the stream so color auto-detection probes the stream the
    lines actually go to.
    """

    def __init__(self, stream: Optional[IO[Any]] = None) -> None:
        """Initialize console handler.

        Args:
            stream: Output stream, sys.stderr by default
        """
        super().__init__(stream if stream is not None else sys.stderr)

    def setFormatter(self, fmt: Optional[logging.Formatter]) -> None:
        """Attach a formatter, sharing the output stream with it.

        Args:
            fmt: Formatter to use for records
        """
        if isinstance(fmt, StdlibLineFormatter) and fmt.stream is None:
            fmt.stream = self.stream
        super().setFormatter(fmt)
