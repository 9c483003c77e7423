"""logline configuration management.

Classes:
    BaseConfig: Base configuration class
    FormatterConfig: Line formatter options
    LoggingConfig: Logging pipeline configuration

Example:
    >>> from logline.config import FormatterConfig
    >>> config = FormatterConfig.from_env(force_quote=True)
"""

from .models import BaseConfig, FormatterConfig, LoggingConfig

__all__ = [
    "BaseConfig",
    "FormatterConfig",
    "LoggingConfig",
]
