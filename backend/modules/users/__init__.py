"""
Users module.

Administrative user management: listing, profile updates, invitations,
role changes and activity feeds.

Public API:
- IUserService: Interface for user operations
- UserDetail: A user with profile, preferences and statistics
- UserError: Factory for user management failures
"""

from .interfaces import IUserService
from .models import Invitation, UserActivity, UserDetail
from .exceptions import (
    CannotChangeOwnRoleError,
    CannotDeleteSelfError,
    EmailInUseError,
    InvalidRoleError,
    UserError,
    UserNotFoundError,
)

__all__ = [
    # Interface
    "IUserService",
    # Models
    "Invitation",
    "UserActivity",
    "UserDetail",
    # Exceptions
    "CannotChangeOwnRoleError",
    "CannotDeleteSelfError",
    "EmailInUseError",
    "InvalidRoleError",
    "UserError",
    "UserNotFoundError",
]
