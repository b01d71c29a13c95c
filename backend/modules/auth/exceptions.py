"""
Authentication module exceptions.

These exceptions are raised by the auth module and the authentication
dependencies, and are converted to 4xx envelopes by the API error handlers.
"""

from shared.exceptions import AuthenticationError, ConflictError, ValidationError


class InvalidCredentialsError(AuthenticationError):
    """Raised on unknown email, wrong password or inactive account."""

    def __init__(self):
        super().__init__("Invalid email or password", code="AUTH_INVALID_CREDENTIALS")


class TokenExpiredError(AuthenticationError):
    """Raised when a JWT has expired."""

    def __init__(self):
        super().__init__("Authentication token has expired", code="AUTH_TOKEN_EXPIRED")


class EmailAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str = ""):
        super().__init__(
            "Email already exists",
            code="AUTH_EMAIL_ALREADY_EXISTS",
            details={"email": email} if email else None,
        )


class RefreshTokenRequiredError(ValidationError):
    """Raised when /auth/refresh is called without a refresh token."""

    def __init__(self):
        super().__init__("Refresh token required", code="AUTH_REFRESH_TOKEN_REQUIRED")


class InvalidRefreshTokenError(AuthenticationError):
    """Raised when a refresh token is malformed, expired or not a refresh token."""

    def __init__(self):
        super().__init__("Invalid refresh token", code="AUTH_INVALID_REFRESH_TOKEN")


class InvalidResetTokenError(ValidationError):
    """Raised when a password reset token is not recognised."""

    def __init__(self):
        super().__init__("Invalid or expired token", code="AUTH_INVALID_TOKEN")


class MissingTokenError(AuthenticationError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self):
        super().__init__("Access token required", code="AUTHENTICATION_TOKEN_REQUIRED")


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token does not resolve to an active user."""

    def __init__(self):
        super().__init__("Invalid or expired token", code="INVALID_TOKEN")


class AuthenticationRequiredError(AuthenticationError):
    """Raised by authorization checks that run before any identity is attached."""

    def __init__(self):
        super().__init__("Authentication required", code="AUTHENTICATION_REQUIRED")


class AuthError:
    """Named constructors for authentication failures."""

    invalid_credentials = InvalidCredentialsError
    token_expired = TokenExpiredError
    user_exists = EmailAlreadyExistsError
    refresh_token_required = RefreshTokenRequiredError
    invalid_refresh_token = InvalidRefreshTokenError
    invalid_token = InvalidResetTokenError
    token_required = MissingTokenError
    invalid_auth_token = InvalidTokenError
    authentication_required = AuthenticationRequiredError
