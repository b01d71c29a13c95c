"""
Authentication service implementation.

Issues and verifies mock HS256 JWTs with PyJWT and checks plaintext
passwords against the in-memory UserRepository. There is no real security
here: the secret is a development constant and passwords are stored as-is.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from shared.logging_config import log_auth_event
from shared.models import AuthUser
from shared.repository import generate_id
from modules.users.repository import UserRepository

from .exceptions import AuthError
from .interfaces import IAuthService
from .models import (
    LoginResult,
    PasswordResetTicket,
    RegisterRequest,
    TokenPayload,
    TokenResult,
)


RESET_TOKEN_PREFIX = "reset_"


class AuthService(IAuthService):
    """Implementation of the authentication service."""

    def __init__(
        self,
        users: UserRepository,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._users = users
        self._settings = settings or get_settings()
        self._logger = logger or logging.getLogger(__name__)

    def _encode(self, claims: dict, lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
        }
        return jwt.encode(payload, self._settings.jwt_secret, algorithm=self._settings.jwt_algorithm)

    def _decode(self, token: str) -> TokenPayload:
        """Raises jwt.ExpiredSignatureError / jwt.InvalidTokenError on a bad token."""
        payload = jwt.decode(
            token,
            self._settings.jwt_secret,
            algorithms=[self._settings.jwt_algorithm],
        )
        return TokenPayload(**payload)

    def generate_token(self, user: AuthUser) -> str:
        """Create an access token carrying the user's email and role."""
        return self._encode(
            {"sub": user.id, "email": user.email, "role": user.role.value, "type": "access"},
            timedelta(minutes=self._settings.access_token_minutes),
        )

    def generate_refresh_token(self, user: AuthUser) -> str:
        return self._encode(
            {"sub": user.id, "type": "refresh"},
            timedelta(days=self._settings.refresh_token_days),
        )

    def _issue(self, user: AuthUser) -> TokenResult:
        minutes = self._settings.access_token_minutes
        return TokenResult(
            token=self.generate_token(user),
            refresh_token=self.generate_refresh_token(user),
            expires_in=f"{minutes // 60}h" if minutes % 60 == 0 else f"{minutes}m",
        )

    async def verify_token(self, token: str) -> Optional[AuthUser]:
        try:
            payload = self._decode(token)
        except (jwt.InvalidTokenError, ValueError) as e:
            self._logger.warning("Token verification failed", extra={"reason": str(e)})
            return None

        if payload.type != "access":
            return None

        user = self._users.find_by_id(payload.sub)
        if user is None or not user.active:
            return None
        return user.to_auth_user()

    async def login_user(self, email: str, password: str) -> LoginResult:
        user = self._users.find_by_email(email)

        if user is None or not user.active:
            log_auth_event(
                self._logger, "login_attempt", user.id if user else None, False,
                email=email, reason="user_not_found" if user is None else "inactive",
            )
            raise AuthError.invalid_credentials()

        if password != user.password:
            log_auth_event(self._logger, "login_attempt", user.id, False, email=email, reason="invalid_password")
            raise AuthError.invalid_credentials()

        updated = self._users.update(user.id, {"last_login": datetime.now(timezone.utc)}) or user
        auth_user = updated.to_auth_user()
        tokens = self._issue(auth_user)

        log_auth_event(self._logger, "login_success", user.id, True, email=email)
        return LoginResult(user=auth_user, **tokens.model_dump())

    async def register_user(self, data: RegisterRequest) -> LoginResult:
        if self._users.find_by_email(data.email) is not None:
            log_auth_event(self._logger, "register_attempt", None, False, email=data.email, reason="email_exists")
            raise AuthError.user_exists(data.email)

        user = self._users.create(data.model_dump())
        auth_user = user.to_auth_user()
        tokens = self._issue(auth_user)

        log_auth_event(self._logger, "register_success", user.id, True, email=data.email)
        return LoginResult(user=auth_user, **tokens.model_dump())

    async def refresh_token(self, refresh_token: Optional[str]) -> TokenResult:
        if not refresh_token:
            raise AuthError.refresh_token_required()

        try:
            payload = self._decode(refresh_token)
        except (jwt.InvalidTokenError, ValueError):
            log_auth_event(self._logger, "token_refresh", None, False, reason="malformed")
            raise AuthError.invalid_refresh_token()

        if payload.type != "refresh":
            log_auth_event(self._logger, "token_refresh", payload.sub, False, reason="not_refresh_token")
            raise AuthError.invalid_refresh_token()

        user = self._users.find_by_id(payload.sub)
        if user is None or not user.active:
            log_auth_event(self._logger, "token_refresh", payload.sub, False, reason="user_unavailable")
            raise AuthError.invalid_refresh_token()

        log_auth_event(self._logger, "token_refresh", user.id, True)
        return self._issue(user.to_auth_user())

    async def logout_user(self, user: AuthUser) -> None:
        log_auth_event(self._logger, "logout", user.id, True)

    async def get_profile(self, user: AuthUser) -> AuthUser:
        """Re-read the caller from storage so profile edits show up."""
        stored = self._users.find_by_id(user.id)
        return stored.to_auth_user() if stored is not None else user

    async def forgot_password(self, email: str) -> PasswordResetTicket:
        if not email:
            raise ValidationError.required_field("email")

        reset_token = generate_id("reset")
        self._logger.info("Password reset requested", extra={"email": email})
        return PasswordResetTicket(
            message="Password reset instructions sent to your email",
            reset_token=reset_token,
        )

    async def reset_password(self, reset_token: str, new_password: str) -> None:
        if not reset_token or not new_password:
            raise ValidationError.invalid_request("Reset token and new password are required")

        if not reset_token.startswith(RESET_TOKEN_PREFIX):
            log_auth_event(self._logger, "password_reset", None, False, reason="invalid_token")
            raise AuthError.invalid_token()

        self._logger.info("Password reset completed")
