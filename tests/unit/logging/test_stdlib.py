"""Tests for the standard library formatter and handler."""

import io
import logging
import sys

import pytest

from logline.config.models import FormatterConfig
from logline.logging.formatters import StdlibLineFormatter
from logline.logging.handlers import ConsoleHandler
from logline.logging.levels import Level


def make_stdlib_record(msg="hello", levelno=logging.INFO, args=None, extra=None, exc_info=None):
    """Build a logging.LogRecord the way Logger.makeRecord does."""
    record = logging.LogRecord(
        name="app.module",
        level=levelno,
        pathname="/app/module.py",
        lineno=42,
        msg=msg,
        args=args,
        exc_info=exc_info,
        func="handle_request",
    )
    for key, value in (extra or {}).items():
        setattr(record, key, value)
    return record


@pytest.fixture
def stream_logger(text_stream):
    """Isolated stdlib logger writing through a ConsoleHandler."""
    def _make(formatter):
        handler = ConsoleHandler(text_stream)
        handler.setFormatter(formatter)
        logger = logging.getLogger("logline.tests.stdlib")
        logger.handlers[:] = [handler]
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        return logger

    yield _make

    logging.getLogger("logline.tests.stdlib").handlers.clear()


class TestStdlibLineFormatter:
    """Test cases for StdlibLineFormatter."""

    def test_to_line_record(self):
        """Test conversion of a stdlib record."""
        formatter = StdlibLineFormatter()
        record = make_stdlib_record(
            "user %s logged in", args=("alice",), extra={"request_id": "r1", "attempt": 2}
        )

        line_record = formatter.to_line_record(record)

        assert line_record.message == "user alice logged in"
        assert line_record.level is Level.INFO
        assert line_record.fields == {"request_id": "r1", "attempt": 2}
        assert line_record.caller is None
        assert line_record.timestamp.timestamp() == pytest.approx(record.created)

    def test_reserved_attributes_not_fields(self):
        """Test standard record attributes never become fields."""
        formatter = StdlibLineFormatter()
        record = make_stdlib_record()
        record.message = record.getMessage()
        record.asctime = "now"

        assert formatter.to_line_record(record).fields == {}

    def test_report_caller(self):
        """Test call-site information is taken from the record."""
        formatter = StdlibLineFormatter(report_caller=True)

        line_record = formatter.to_line_record(make_stdlib_record())

        assert line_record.caller.function == "handle_request"
        assert line_record.caller.file == "/app/module.py"
        assert line_record.caller.line == 42

    def test_format_without_newline(self):
        """Test the handler's terminator is not duplicated."""
        formatter = StdlibLineFormatter(disable_timestamp=True, disable_colors=True)

        text = formatter.format(make_stdlib_record(extra={"a": "1"}))

        assert text == "INFO :: " + "hello".ljust(44) + "  a=1"

    def test_format_with_caller(self):
        """Test caller annotation through the bridge."""
        formatter = StdlibLineFormatter(
            FormatterConfig(disable_timestamp=True, disable_colors=True),
            report_caller=True,
        )

        text = formatter.format(make_stdlib_record(levelno=logging.WARNING))

        assert text.startswith("WARNING (handle_request:42) :: hello")

    def test_format_exception(self):
        """Test exception tracebacks follow the line."""
        formatter = StdlibLineFormatter(disable_timestamp=True, disable_colors=True)
        try:
            raise ValueError("broken")
        except ValueError:
            record = make_stdlib_record(levelno=logging.ERROR, exc_info=sys.exc_info())

        text = formatter.format(record)
        first_line, _, rest = text.partition("\n")

        assert first_line.startswith("ERROR :: hello")
        assert rest.startswith("Traceback (most recent call last):")
        assert "ValueError: broken" in rest

    def test_critical_maps_to_fatal(self):
        """Test CRITICAL records render as FATAL."""
        formatter = StdlibLineFormatter(disable_timestamp=True, disable_colors=True)

        text = formatter.format(make_stdlib_record(levelno=logging.CRITICAL))

        assert text.startswith("FATAL :: ")


class TestConsoleHandler:
    """Test cases for ConsoleHandler."""

    def test_default_stream_is_stderr(self):
        """Test stderr is used by default."""
        assert ConsoleHandler().stream is sys.stderr

    def test_shares_stream_with_formatter(self, text_stream):
        """Test the formatter learns the handler's stream."""
        handler = ConsoleHandler(text_stream)
        formatter = StdlibLineFormatter()

        handler.setFormatter(formatter)

        assert formatter.stream is text_stream
        assert handler.formatter is formatter

    def test_keeps_formatter_stream(self, text_stream):
        """Test an explicit formatter stream is not replaced."""
        other = io.StringIO()
        formatter = StdlibLineFormatter(stream=other)

        ConsoleHandler(text_stream).setFormatter(formatter)

        assert formatter.stream is other

    def test_plain_formatter_accepted(self, text_stream):
        """Test ordinary formatters still work."""
        handler = ConsoleHandler(text_stream)
        formatter = logging.Formatter("%(message)s")

        handler.setFormatter(formatter)

        assert handler.formatter is formatter

    def test_writes_lines(self, stream_logger, text_stream):
        """Test records are written as lines through a logger."""
        logger = stream_logger(StdlibLineFormatter(disable_timestamp=True))

        logger.info("first", extra={"port": 8080})
        logger.warning("second")

        lines = text_stream.getvalue().splitlines()
        assert lines == [
            "INFO :: " + "first".ljust(44) + "  port=8080",
            "WARNING :: " + "second".ljust(44) + " ",
        ]

    def test_non_terminal_stream_uncolored(self, stream_logger, text_stream):
        """Test lines written to a StringIO carry no escapes."""
        formatter = StdlibLineFormatter()
        logger = stream_logger(formatter)

        logger.error("failure", extra={"code": 500})

        assert "\x1b" not in text_stream.getvalue()
        assert formatter.line_formatter.is_terminal is False
