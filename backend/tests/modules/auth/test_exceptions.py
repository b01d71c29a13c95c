"""Tests for the AuthError constructors."""

import pytest

from modules.auth.exceptions import AuthError
from shared.exceptions import ErrorKind


class TestAuthError:
    @pytest.mark.parametrize(
        "factory,status,code",
        [
            (AuthError.invalid_credentials, 401, "AUTH_INVALID_CREDENTIALS"),
            (AuthError.token_expired, 401, "AUTH_TOKEN_EXPIRED"),
            (AuthError.user_exists, 409, "AUTH_EMAIL_ALREADY_EXISTS"),
            (AuthError.refresh_token_required, 400, "AUTH_REFRESH_TOKEN_REQUIRED"),
            (AuthError.invalid_refresh_token, 401, "AUTH_INVALID_REFRESH_TOKEN"),
            (AuthError.invalid_token, 400, "AUTH_INVALID_TOKEN"),
            (AuthError.token_required, 401, "AUTHENTICATION_TOKEN_REQUIRED"),
            (AuthError.invalid_auth_token, 401, "INVALID_TOKEN"),
            (AuthError.authentication_required, 401, "AUTHENTICATION_REQUIRED"),
        ],
    )
    def test_status_and_code(self, factory, status, code):
        error = factory()
        assert error.status_code == status
        assert error.code == code

    def test_user_exists_is_conflict(self):
        assert AuthError.user_exists("a@example.com").kind is ErrorKind.CONFLICT
