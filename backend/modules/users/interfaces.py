"""
User module interface.

Route handlers depend on IUserService, not the concrete implementation.
"""

from typing import Any, Protocol, runtime_checkable

from shared.models import AuthUser, PaginatedResult, PaginationOptions

from .models import Invitation, UpdateUserRequest, UserActivity, UserDetail


@runtime_checkable
class IUserService(Protocol):
    """Interface for administrative user management."""

    async def get_users(self, pagination: PaginationOptions) -> PaginatedResult[AuthUser]:
        """List users without passwords."""
        ...

    async def get_user_by_id(self, user_id: str) -> UserDetail:
        """
        Get one user with profile, preferences and statistics.

        Raises:
            UserNotFoundError: If no user has this id
        """
        ...

    async def update_user(self, user_id: str, changes: UpdateUserRequest) -> AuthUser:
        ...

    async def delete_user(self, user_id: str, actor: AuthUser) -> None:
        """
        Delete a user.

        Raises:
            CannotDeleteSelfError: If ``actor`` is the target
            UserNotFoundError: If no user has this id
        """
        ...

    async def invite_user(self, email: str, role: Any) -> Invitation:
        ...

    async def update_user_role(self, user_id: str, role: str, actor: AuthUser) -> AuthUser:
        """
        Change a user's role.

        Raises:
            CannotChangeOwnRoleError: If ``actor`` is the target
            UserNotFoundError: If no user has this id
            InvalidRoleError: If ``role`` is not a known role
        """
        ...

    async def get_user_activity(
        self, user_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[UserActivity]:
        ...
