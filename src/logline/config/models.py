"""Configuration models for logline.

This module defines Pydantic models for the formatter options and for
the logging pipeline that hosts the formatter. Models are frozen: a
formatter's configuration is fixed before its first use.

Classes:
    BaseConfig: Base configuration class
    FormatterConfig: Line formatter options
    LoggingConfig: Pipeline configuration (level, caller reporting, formatter)

Example:
    >>> config = FormatterConfig(disable_colors=True, pad_level_text=True)
    >>> config = config.update_from_dict({"disable_sorting": True})
    >>> config.disable_sorting
    True
"""

import os
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ConfigurationError, ValidationError

SortingFunc = Callable[[List[str]], Optional[List[str]]]
# Receives a logline.logging.records.CallerInfo
CallerFormatter = Callable[[Any], Tuple[str, str]]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class BaseConfig(BaseModel):
    """Base configuration class with common functionality.

    Wraps pydantic validation failures in ConfigurationError so callers
    only deal with the logline exception hierarchy.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
        validate_default=True,
    )

    @classmethod
    def create(cls, **options: Any) -> "BaseConfig":
        """Build a configuration, raising ConfigurationError on bad options.

        Args:
            **options: Configuration values

        Returns:
            Validated configuration instance

        Raises:
            ConfigurationError: If an option is unknown or has a bad value
        """
        try:
            return cls(**options)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid {cls.__name__} options",
                code="INVALID_CONFIG",
                context={"errors": [err["loc"] for err in e.errors()]},
                cause=e,
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration
        """
        return self.model_dump()

    def update_from_dict(self, data: Dict[str, Any]) -> "BaseConfig":
        """Return a new configuration with values from data applied.

        Args:
            data: Dictionary with updated values

        Returns:
            New configuration instance with updated values
        """
        current_data = self.to_dict()
        current_data.update(data)
        return self.__class__.create(**current_data)


class FormatterConfig(BaseConfig):
    """Line formatter options.

    Attributes:
        timestamp_format: strftime pattern, default pattern when unset
        disable_timestamp: Omit the timestamp and its separator
        force_colors: Colorize even when the output is not a terminal
        disable_colors: Never colorize; wins over force_colors
        force_quote: Quote every field value
        disable_quote: Never quote field values, unless force_quote is set
        truncate_level_text: Cut level text to 4 characters
        pad_level_text: Pad level text to the widest level name
        disable_sorting: Keep field insertion order
        sorting_func: Custom key ordering; reorders the list in place or
            returns the ordered list
        caller_formatter: Maps a CallerInfo to (function_text, file_text)
    """

    timestamp_format: Optional[str] = Field(None, description="strftime timestamp pattern")
    disable_timestamp: bool = Field(False, description="Omit timestamp")
    force_colors: bool = Field(False, description="Force ANSI colors")
    disable_colors: bool = Field(False, description="Disable ANSI colors")
    force_quote: bool = Field(False, description="Always quote values")
    disable_quote: bool = Field(False, description="Never quote values")
    truncate_level_text: bool = Field(False, description="Cut level text to 4 characters")
    pad_level_text: bool = Field(False, description="Pad level text to max width")
    disable_sorting: bool = Field(False, description="Keep field insertion order")
    sorting_func: Optional[SortingFunc] = Field(None, description="Custom key ordering")
    caller_formatter: Optional[CallerFormatter] = Field(None, description="Custom caller rendering")

    @field_validator("timestamp_format")
    @classmethod
    def empty_format_means_default(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty timestamp pattern as unset."""
        return v or None

    @classmethod
    def from_env(
        cls,
        prefix: str = "LOGLINE_",
        environ: Optional[Dict[str, str]] = None,
        **overrides: Any,
    ) -> "FormatterConfig":
        """Build a configuration from environment variables.

        Every plain option can be set as PREFIX + option name in upper
        case, e.g. LOGLINE_DISABLE_COLORS=1 or LOGLINE_TIMESTAMP_FORMAT.
        Callables can only be passed through overrides.

        Args:
            prefix: Environment variable prefix
            environ: Mapping to read instead of os.environ
            **overrides: Explicit values, applied after the environment

        Returns:
            Validated configuration

        Raises:
            ValidationError: If a boolean variable has an unrecognized value
        """
        environ = os.environ if environ is None else environ
        options: Dict[str, Any] = {}

        for name, field_info in cls.model_fields.items():
            if name in ("sorting_func", "caller_formatter"):
                continue
            raw = environ.get(prefix + name.upper())
            if raw is None:
                continue
            if field_info.annotation is bool:
                options[name] = _parse_bool(prefix + name.upper(), raw)
            else:
                options[name] = raw

        options.update(overrides)
        return cls.create(**options)


class LoggingConfig(BaseConfig):
    """Logging pipeline configuration.

    Attributes:
        level: Minimum level passed to the handler
        report_caller: Attach call-site information to records
        formatter: Line formatter options
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )
    report_caller: bool = Field(False, description="Annotate lines with the call site")
    formatter: FormatterConfig = Field(default_factory=FormatterConfig)

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names in any case and the WARN alias."""
        if not isinstance(v, str):
            return v
        v = v.strip().upper()
        return "WARNING" if v == "WARN" else v


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValidationError(
        f"Invalid boolean value for {name}: {raw!r}",
        code="INVALID_BOOLEAN",
        context={"variable": name, "value": raw},
    )
