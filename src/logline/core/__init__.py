"""logline core infrastructure.

Exports the exception hierarchy shared by the config and logging packages.
"""

from .exceptions import ConfigurationError, LogLineException, ValidationError

__all__ = [
    "LogLineException",
    "ConfigurationError",
    "ValidationError",
]
