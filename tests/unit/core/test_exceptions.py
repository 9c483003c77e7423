"""Tests for the logline exception hierarchy."""

import pytest

from logline.core.exceptions import ConfigurationError, LogLineException, ValidationError


class TestLogLineException:
    """Test cases for LogLineException base class."""

    def test_basic_exception(self):
        """Test exception with message only."""
        exc = LogLineException("Something failed")

        assert exc.code == "LogLineException"
        assert exc.context == {}
        assert exc.cause is None
        assert str(exc) == "LogLineException: Something failed"

    def test_exception_with_details(self):
        """Test exception with code, context and cause."""
        cause = ValueError("bad value")
        exc = LogLineException(
            "Formatter misconfigured",
            code="BAD_FORMATTER",
            context={"option": "sorting_func"},
            cause=cause,
        )

        assert exc.code == "BAD_FORMATTER"
        assert exc.context == {"option": "sorting_func"}
        assert exc.cause is cause
        assert str(exc) == "BAD_FORMATTER: Formatter misconfigured"

    def test_repr(self):
        """Test detailed representation."""
        exc = LogLineException("failed", code="X")

        assert repr(exc) == (
            "LogLineException(message='failed', code='X', context={}, cause=None)"
        )

    def test_to_dict(self):
        """Test dictionary serialization."""
        exc = ConfigurationError(
            "Invalid options",
            code="INVALID_CONFIG",
            context={"errors": ["colour"]},
            cause=KeyError("colour"),
        )

        assert exc.to_dict() == {
            "error_type": "ConfigurationError",
            "message": "Invalid options",
            "code": "INVALID_CONFIG",
            "context": {"errors": ["colour"]},
            "cause": "'colour'",
        }


class TestHierarchy:
    """Test cases for exception inheritance."""

    def test_validation_error_is_configuration_error(self):
        """Test ValidationError can be caught as ConfigurationError."""
        with pytest.raises(ConfigurationError):
            raise ValidationError("bad level")

    def test_default_codes_use_class_name(self):
        """Test subclasses default their code to the class name."""
        assert ConfigurationError("x").code == "ConfigurationError"
        assert ValidationError("x").code == "ValidationError"
        assert isinstance(ValidationError("x"), LogLineException)
