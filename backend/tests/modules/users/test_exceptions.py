import pytest

from shared.exceptions import ErrorCode, NotFoundError, ValidationError, ConflictError, AuthenticationError
from modules.users.exceptions import (
    UserNotFoundError,
    FieldValidationError,
    EmailExistsError,
    UsernameExistsError,
    AvatarRejectedError,
    AvatarTooLargeError,
    InvalidAvatarTypeError,
)
from modules.auth.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    EncodingError,
)


class TestUsersExceptions:
    def test_user_not_found(self):
        error = UserNotFoundError(5)
        assert isinstance(error, NotFoundError)
        assert error.code is ErrorCode.USER_NOT_FOUND
        assert error.details == {"user_id": 5}

    def test_field_validation_error(self):
        error = FieldValidationError("email", "invalid email format")
        assert isinstance(error, ValidationError)
        assert error.field == "email"
        assert error.message == "invalid email format"
        assert error.to_dict() == {
            "error": "VALIDATION_ERROR",
            "message": "invalid email format",
            "details": {"field": "email"},
        }

    @pytest.mark.parametrize(
        "error,code",
        [
            (EmailExistsError(), ErrorCode.EMAIL_EXISTS),
            (UsernameExistsError(), ErrorCode.USERNAME_EXISTS),
        ],
    )
    def test_conflicts(self, error, code):
        assert isinstance(error, ConflictError)
        assert error.code is code

    def test_avatar_errors(self):
        too_large = AvatarTooLargeError(3 * 1024 * 1024, 2 * 1024 * 1024)
        bad_type = InvalidAvatarTypeError("a.gif", (".jpg", ".jpeg", ".png"))

        assert isinstance(too_large, AvatarRejectedError)
        assert isinstance(bad_type, AvatarRejectedError)
        assert "2MB" in too_large.message
        assert bad_type.message == "Invalid file type (only jpg, jpeg, png allowed)"


class TestAuthExceptions:
    def test_invalid_credentials(self):
        error = InvalidCredentialsError()
        assert isinstance(error, AuthenticationError)
        assert error.code is ErrorCode.INVALID_CREDENTIALS

    @pytest.mark.parametrize(
        "error,reason",
        [
            (InvalidTokenError(), "invalid"),
            (ExpiredTokenError(), "expired"),
            (MissingTokenError(), "missing"),
        ],
    )
    def test_token_errors_share_kind(self, error, reason):
        """Every token failure is reported as INVALID_TOKEN."""
        assert isinstance(error, InvalidTokenError)
        assert error.code is ErrorCode.INVALID_TOKEN
        assert error.details["reason"] == reason

    def test_encoding_error(self):
        assert EncodingError().code is ErrorCode.ENCODING_ERROR
