"""
User module data models.

Request bodies for user management plus the enriched views returned
by the user endpoints.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import EmailStr, Field

from shared.models import AuthUser, CamelModel, UserRole


class UpdateUserRequest(CamelModel):
    """Partial profile update. Role changes go through the role endpoint."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    active: Optional[bool] = None


class InviteUserRequest(CamelModel):
    email: EmailStr
    role: UserRole = UserRole.USER


class UpdateRoleRequest(CamelModel):
    # Plain string so an unknown role reaches the service and yields USER_INVALID_ROLE.
    role: str = Field(..., min_length=1)


class UserProfile(CamelModel):
    avatar: str
    bio: str
    location: str
    website: str


class UserPreferences(CamelModel):
    theme: str = "light"
    notifications: bool = True
    language: str = "en"


class UserStatistics(CamelModel):
    collections_count: int = 0
    files_count: int = 0
    searches_count: int = 0


class UserDetail(AuthUser):
    """A user with the mock profile, preferences and statistics attached."""

    profile: UserProfile
    preferences: UserPreferences
    statistics: UserStatistics


class Invitation(CamelModel):
    email: EmailStr
    role: UserRole
    invite_token: str
    expires_at: datetime


class UserActivity(CamelModel):
    id: str
    type: str
    description: str
    timestamp: datetime
    metadata: dict[str, Any] = Field(default_factory=dict)
