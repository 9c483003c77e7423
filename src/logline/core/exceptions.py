"""logline exception hierarchy.

Formatting a record never fails, so errors only surface at the
configuration seam: building a formatter, parsing a level name or
wiring the logging pipeline.

Classes:
    LogLineException: Base exception for all logline errors
    ConfigurationError: Configuration related errors
    ValidationError: Invalid option values or names

Example:
    >>> try:
    ...     Level.parse("verbose")
    ... except ValidationError as e:
    ...     print(e.code, e.context)
    UNKNOWN_LOG_LEVEL {'level': 'verbose'}
"""

from typing import Any, Dict, Optional


class LogLineException(Exception):
    """Base exception for all logline errors.
    
    Attributes:
        code: Unique error code for categorization
        context: Additional context information about the error
        cause: Original exception that caused this error (if any)
    
    Example:
        >>> raise LogLineException(
        ...     "Formatter misconfigured",
        ...     code="BAD_FORMATTER",
        ...     context={"option": "sorting_func"}
        ... )
    """
    
    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize logline exception.
        
        Args:
            message: Human-readable error description
            code: Unique error code for categorization (defaults to class name)
            context: Additional context information
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.code: str = code or self.__class__.__name__
        self.context: Dict[str, Any] = context or {}
        self.cause: Optional[Exception] = cause
        
    def __str__(self) -> str:
        """Return formatted error message with code."""
        return f"{self.code}: {super().__str__()}"
        
    def __repr__(self) -> str:
        """Return detailed representation of the exception."""
        return (
            f"{self.__class__.__name__}("
            f"message={super().__str__()!r}, "
            f"code={self.code!r}, "
            f"context={self.context!r}, "
            f"cause={self.cause!r})"
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization.
        
        Returns:
            Dictionary representation of the exception
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(super().__str__()),
            "code": self.code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
        }


class ConfigurationError(LogLineException):
    """Configuration related errors.
    
    Raised when formatter or pipeline options cannot be applied, for
    example an unknown option name or a value of the wrong type.
    """
    pass


class ValidationError(ConfigurationError):
    """Value validation errors.
    
    Raised when a single value fails validation, such as an unknown
    level name.
    """
    pass
