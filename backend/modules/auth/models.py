"""
Authentication module data models.

These models define request bodies for the auth endpoints, the token
results they return and the claims carried inside the mock JWTs.
"""

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from shared.models import AuthUser, CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)


class RefreshRequest(CamelModel):
    # Optional so a missing token reaches the service as AUTH_REFRESH_TOKEN_REQUIRED.
    refresh_token: Optional[str] = None


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6, max_length=128)


class TokenResult(CamelModel):
    """Fresh access and refresh tokens."""

    token: str
    refresh_token: str
    expires_in: str = "1h"


class LoginResult(TokenResult):
    user: AuthUser


class PasswordResetTicket(CamelModel):
    message: str
    reset_token: str


class TokenPayload(BaseModel):
    """
    Claims inside a mock JWT.

    Access tokens carry email and role; refresh tokens carry
    ``type="refresh"`` and nothing else besides the subject.
    """

    sub: str = Field(..., description="User ID")
    email: Optional[str] = None
    role: Optional[str] = None
    type: Literal["access", "refresh"] = "access"
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")

    model_config = {"extra": "ignore"}
