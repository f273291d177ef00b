"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    ErrorCode,
    VayuraError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ConfigurationError,
    StorageError,
)


class TestVayuraError:
    def test_vayura_error_message(self):
        """VayuraError should store message."""
        error = VayuraError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_vayura_error_default_code(self):
        """VayuraError should default to INTERNAL_ERROR."""
        error = VayuraError("Test error")
        assert error.code is ErrorCode.INTERNAL_ERROR

    def test_vayura_error_custom_code(self):
        """VayuraError should accept a custom code."""
        error = VayuraError("Test error", code=ErrorCode.USER_NOT_FOUND)
        assert error.code is ErrorCode.USER_NOT_FOUND

    def test_vayura_error_default_details(self):
        """VayuraError should default details to empty dict."""
        error = VayuraError("Test error")
        assert error.details == {}

    def test_vayura_error_to_dict(self):
        """VayuraError should convert to dict with the code's string value."""
        error = VayuraError(
            "Test error",
            code=ErrorCode.EMAIL_EXISTS,
            details={"key": "value"},
        )
        result = error.to_dict()

        assert result["error"] == "EMAIL_EXISTS"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"


class TestErrorCodes:
    @pytest.mark.parametrize(
        "exc_class,code",
        [
            (ValidationError, ErrorCode.VALIDATION_ERROR),
            (ConfigurationError, ErrorCode.CONFIGURATION_ERROR),
            (StorageError, ErrorCode.STORAGE_ERROR),
            (NotFoundError, ErrorCode.INTERNAL_ERROR),
        ],
    )
    def test_default_codes(self, exc_class, code):
        """Each base class should carry its default code."""
        assert exc_class("boom").code is code

    def test_codes_compare_as_strings(self):
        """ErrorCode values should compare equal to their string names."""
        assert ErrorCode.INVALID_TOKEN == "INVALID_TOKEN"


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_class",
        [
            NotFoundError,
            ValidationError,
            ConflictError,
            AuthenticationError,
            ConfigurationError,
            StorageError,
        ],
    )
    def test_inherits_from_vayura_error(self, exc_class):
        """All base exceptions should inherit from VayuraError."""
        assert issubclass(exc_class, VayuraError)
