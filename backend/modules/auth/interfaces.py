"""
Authentication module interface.

Other modules and the API layer depend on IAuthService, not the concrete
implementation. This enables testing with mocks and swapping the mock JWT
scheme for a real identity provider later.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthUser

from .models import LoginResult, PasswordResetTicket, RegisterRequest, TokenResult


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def verify_token(self, token: str) -> Optional[AuthUser]:
        """
        Resolve an access token to an active user.

        Args:
            token: Bearer token from the Authorization header

        Returns:
            AuthUser if the token is valid and its subject is an active
            user, None otherwise. Never raises for a bad token.
        """
        ...

    async def login_user(self, email: str, password: str) -> LoginResult:
        """
        Raises:
            InvalidCredentialsError: Unknown email, wrong password or inactive account
        """
        ...

    async def register_user(self, data: RegisterRequest) -> LoginResult:
        """
        Raises:
            EmailAlreadyExistsError: If the email is already registered
        """
        ...

    async def refresh_token(self, refresh_token: Optional[str]) -> TokenResult:
        """
        Raises:
            RefreshTokenRequiredError: If no token was supplied
            InvalidRefreshTokenError: If the token is not a valid refresh token
        """
        ...

    async def logout_user(self, user: AuthUser) -> None:
        """Record a logout. Tokens are stateless, so nothing is revoked."""
        ...

    async def get_profile(self, user: AuthUser) -> AuthUser:
        ...

    async def forgot_password(self, email: str) -> PasswordResetTicket:
        ...

    async def reset_password(self, reset_token: str, new_password: str) -> None:
        """
        Raises:
            InvalidResetTokenError: If the reset token is not recognised
        """
        ...
