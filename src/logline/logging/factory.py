"""Logging pipeline setup for logline.

This module wires the line formatter into the standard library logging
module and into structlog, so both kinds of loggers produce the same
lines.

Classes:
    LoggerFactory: Pipeline configuration and logger creation

Functions:
    configure_logging: Configure logging globally
    get_logger: Convenience function for getting loggers
    get_factory: Access the global factory
    shutdown_logging: Undo the global configuration

Example:
    >>> from logline.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", pad_level_text=True)
    >>> logger = get_logger(__name__)
    >>> logger.info("Application started", version="1.0.0")
"""

import logging
from typing import IO, Any, Dict, List, Optional

import structlog

from ..config.models import FormatterConfig, LoggingConfig
from .formatters import StdlibLineFormatter
from .handlers import ConsoleHandler
from .levels import Level
from .structured import LineRenderer


def _level_number(level: str) -> int:
    if level == "TRACE":
        return int(Level.TRACE)
    return getattr(logging, level)


class LoggerFactory:
    """Configure the logging pipeline and hand out loggers.

    Two structlog outputs are supported. With ``direct=False`` (the
    default) structlog events are passed to standard library loggers and
    rendered by the same ConsoleHandler/StdlibLineFormatter pair as plain
    logging calls. With ``direct=True`` structlog renders lines itself
    with LineRenderer and writes them to the stream.

    Attributes:
        config: Pipeline configuration
        initialized: Whether the pipeline has been configured

    Example:
        >>> factory = LoggerFactory(LoggingConfig(level="DEBUG"))
        >>> factory.configure()
        >>> factory.get_logger("database.connector").info("connected", host="db01")
    """

    def __init__(
        self,
        config: Optional[LoggingConfig] = None,
        *,
        stream: Optional[IO[Any]] = None,
        direct: bool = False,
    ) -> None:
        """Initialize logger factory.

        Args:
            config: Pipeline configuration
            stream: Output stream, stderr by default
            direct: Let structlog write lines without the stdlib handler
        """
        self.config = config or LoggingConfig()
        self.stream = stream
        self.direct = direct
        self.initialized = False
        self._handler: Optional[ConsoleHandler] = None

    def configure(self) -> None:
        """Configure the standard library and structlog."""
        if self.initialized:
            return

        logging.addLevelName(int(Level.TRACE), "TRACE")
        self._configure_stdlib_logging()
        self._configure_structlog()

        self.initialized = True

    def configure_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """Reconfigure from a dictionary of options.

        Keys naming FormatterConfig options are applied to the formatter
        configuration, the others to the pipeline configuration.

        Args:
            config_dict: Configuration options

        Raises:
            ConfigurationError: If an option is unknown or invalid
        """
        formatter_keys = set(FormatterConfig.model_fields)
        formatter_options = {k: v for k, v in config_dict.items() if k in formatter_keys}
        pipeline_options = {k: v for k, v in config_dict.items() if k not in formatter_keys}

        if formatter_options:
            pipeline_options["formatter"] = self.config.formatter.update_from_dict(formatter_options)

        self.config = self.config.update_from_dict(pipeline_options)

        if self.initialized:
            self.shutdown()
        self.configure()

    def _configure_stdlib_logging(self) -> None:
        level = _level_number(self.config.level)

        handler = ConsoleHandler(self.stream)
        handler.setLevel(level)
        handler.setFormatter(
            StdlibLineFormatter(self.config.formatter, report_caller=self.config.report_caller)
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.addHandler(handler)
        self._handler = handler

    def _configure_structlog(self) -> None:
        processors: List[Any] = [structlog.contextvars.merge_contextvars]

        if self.direct:
            processors.append(structlog.processors.add_log_level)
        else:
            processors.extend([
                structlog.stdlib.filter_by_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
            ])

        processors.extend([
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ])

        if not self.direct:
            processors.append(structlog.stdlib.render_to_log_kwargs)
            structlog.configure(
                processors=processors,
                wrapper_class=structlog.stdlib.BoundLogger,
                logger_factory=structlog.stdlib.LoggerFactory(),
                context_class=dict,
                cache_logger_on_first_use=True,
            )
            return

        if self.config.report_caller:
            processors.append(
                structlog.processors.CallsiteParameterAdder({
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.PATHNAME,
                })
            )

        stream = self._handler.stream if self._handler is not None else self.stream
        processors.append(
            LineRenderer(
                self.config.formatter,
                stream=stream,
                report_caller=self.config.report_caller,
            )
        )

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                max(_level_number(self.config.level), logging.DEBUG)
            ),
            logger_factory=structlog.WriteLoggerFactory(file=stream),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    def get_logger(self, name: Optional[str] = None) -> Any:
        """Get a structlog logger, configuring the pipeline if needed.

        Args:
            name: Logger name (typically module name)

        Returns:
            structlog bound logger
        """
        if not self.initialized:
            self.configure()
        return structlog.get_logger(name)

    @property
    def handler(self) -> Optional[ConsoleHandler]:
        """Handler installed on the root logger, if configured."""
        return self._handler

    def shutdown(self) -> None:
        """Remove the installed handler and reset structlog."""
        if self._handler is not None:
            logging.getLogger().removeHandler(self._handler)
            self._handler.flush()
            self._handler = None

        structlog.reset_defaults()
        self.initialized = False

    def __repr__(self) -> str:
        """Return string representation of logger factory."""
        return (
            f"LoggerFactory("
            f"level={self.config.level!r}, "
            f"direct={self.direct!r}, "
            f"initialized={self.initialized})"
        )


# Global logger factory instance
_global_factory = LoggerFactory()


def configure_logging(
    *,
    level: str = "INFO",
    report_caller: bool = False,
    stream: Optional[IO[Any]] = None,
    direct: bool = False,
    **formatter_options: Any,
) -> LoggerFactory:
    """Configure logline logging globally.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
        report_caller: Annotate lines with the call site
        stream: Output stream, stderr by default
        direct: Let structlog write lines without the stdlib handler
        **formatter_options: FormatterConfig options

    Returns:
        The configured global factory

    Raises:
        ConfigurationError: If an option is unknown or invalid

    Example:
        >>> configure_logging(level="DEBUG", force_colors=True, truncate_level_text=True)
    """
    global _global_factory

    formatter = FormatterConfig.create(**formatter_options)
    config = LoggingConfig.create(level=level, report_caller=report_caller, formatter=formatter)

    _global_factory.shutdown()
    _global_factory = LoggerFactory(config, stream=stream, direct=direct)
    _global_factory.configure()
    return _global_factory


def get_logger(name: Optional[str] = None) -> Any:
    """Get a structlog logger from the global factory.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog bound logger
    """
    return _global_factory.get_logger(name)


def get_factory() -> LoggerFactory:
    """Get the global logger factory instance.

    Returns:
        Global LoggerFactory instance
    """
    return _global_factory


def shutdown_logging() -> None:
    """Shutdown the global logging configuration."""
    _global_factory.shutdown()
