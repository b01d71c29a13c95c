"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models stay in their respective module directories.

All API-facing models serialize with camelCase keys and accept either
camelCase or snake_case on input.
"""

from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class UserRole(str, Enum):
    """Roles known to the authorization layer."""

    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


class AuthUser(CamelModel):
    """
    Public user identity.

    This is what the authentication stage attaches to the request context
    and what every endpoint returns in place of a stored user. It never
    carries a password.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="User ID")
    email: EmailStr = Field(..., description="User's email address")
    name: str = Field(..., description="Display name")
    role: UserRole = Field(default=UserRole.USER, description="Authorization role")
    active: bool = Field(default=True, description="Inactive users cannot log in")
    last_login: Optional[datetime] = Field(None, description="Last successful login")
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: Optional[datetime] = Field(None, description="Last profile change")


class User(AuthUser):
    """Stored user record. Only the auth and user services see the password."""

    password: str = Field(..., description="Plaintext mock password")
    avatar: Optional[str] = None

    def to_auth_user(self) -> AuthUser:
        """Strip the password and storage-only fields."""
        return AuthUser.model_validate(self.model_dump(exclude={"password", "avatar"}))


class PaginationOptions(CamelModel):
    """Page request, always within bounds once built by parse_pagination."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginatedResult(CamelModel, Generic[T]):
    """One page of a filtered collection plus the size of the whole set."""

    items: list[T] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)


class RequestContext:
    """
    Per-request state shared by middleware stages and handlers.

    Created once by the request-context middleware and stored on
    ``request.state.context``. Only the authentication stage assigns
    ``user``.
    """

    __slots__ = ("request_id", "started_at", "client_ip", "user")

    def __init__(self, request_id: str, started_at: float, client_ip: str = "unknown"):
        self.request_id = request_id
        self.started_at = started_at
        self.client_ip = client_ip
        self.user: Optional[AuthUser] = None

    def __repr__(self) -> str:
        user_id = self.user.id if self.user else None
        return f"RequestContext(request_id={self.request_id!r}, user={user_id!r})"
