"""
User service implementation.

Administrative user management on top of the in-memory UserRepository.
Mutations follow the same order everywhere: load the target, check the
actor against it, then write.
"""

import logging
import random
from datetime import timedelta
from typing import Optional

from shared.models import AuthUser, PaginatedResult, PaginationOptions, UserRole
from shared.repository import generate_id, paginate, utcnow

from .exceptions import UserError
from .interfaces import IUserService
from .models import (
    Invitation,
    UpdateUserRequest,
    UserActivity,
    UserDetail,
    UserPreferences,
    UserProfile,
    UserStatistics,
)
from .repository import UserRepository


ACTIVITY_TYPES = ["login", "logout", "file_upload", "search", "collection_create", "file_download"]
INVITE_TTL = timedelta(days=7)


class UserService(IUserService):
    """Implementation of the user service."""

    def __init__(self, repository: UserRepository, logger: Optional[logging.Logger] = None):
        self._users = repository
        self._logger = logger or logging.getLogger(__name__)

    async def get_users(self, pagination: PaginationOptions) -> PaginatedResult[AuthUser]:
        page = self._users.find_all(pagination)
        return PaginatedResult[AuthUser](
            items=[user.to_auth_user() for user in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
        )

    async def get_user_by_id(self, user_id: str) -> UserDetail:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserError.not_found(user_id)

        # Seeded by id so repeated reads show the same numbers.
        rng = random.Random(user_id)
        return UserDetail(
            **user.to_auth_user().model_dump(),
            profile=UserProfile(
                avatar=user.avatar or f"https://api.dicebear.com/7.x/initials/svg?seed={user_id}",
                bio=f"Bio for {user.name}",
                location="New York, NY",
                website=f"https://{user_id}.example.com",
            ),
            preferences=UserPreferences(),
            statistics=UserStatistics(
                collections_count=rng.randint(0, 49),
                files_count=rng.randint(0, 499),
                searches_count=rng.randint(0, 999),
            ),
        )

    async def update_user(self, user_id: str, changes: UpdateUserRequest) -> AuthUser:
        if self._users.find_by_id(user_id) is None:
            raise UserError.not_found(user_id)

        fields = changes.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in fields:
            holder = self._users.find_by_email(fields["email"])
            if holder is not None and holder.id != user_id:
                raise UserError.email_exists(fields["email"])

        updated = self._users.update(user_id, fields)
        if updated is None:
            raise UserError.not_found(user_id)

        self._logger.info("User updated", extra={"user_id": user_id})
        return updated.to_auth_user()

    async def delete_user(self, user_id: str, actor: AuthUser) -> None:
        if actor.id == user_id:
            raise UserError.cannot_delete_self()
        if self._users.find_by_id(user_id) is None:
            raise UserError.not_found(user_id)

        self._users.delete(user_id)
        self._logger.info("User deleted", extra={"user_id": user_id, "actor_id": actor.id})

    async def invite_user(self, email: str, role: UserRole = UserRole.USER) -> Invitation:
        invitation = Invitation(
            email=email,
            role=role,
            invite_token=generate_id("invite"),
            expires_at=utcnow() + INVITE_TTL,
        )
        self._logger.info("User invited", extra={"email": email, "role": invitation.role.value})
        return invitation

    async def update_user_role(self, user_id: str, role: str, actor: AuthUser) -> AuthUser:
        if actor.id == user_id:
            raise UserError.cannot_change_own_role()
        if self._users.find_by_id(user_id) is None:
            raise UserError.not_found(user_id)
        try:
            new_role = UserRole(role)
        except ValueError:
            raise UserError.invalid_role(role)

        updated = self._users.update(user_id, {"role": new_role})
        if updated is None:
            raise UserError.not_found(user_id)

        self._logger.info(
            "User role updated",
            extra={"user_id": user_id, "role": new_role.value, "actor_id": actor.id},
        )
        return updated.to_auth_user()

    async def get_user_activity(
        self, user_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[UserActivity]:
        if self._users.find_by_id(user_id) is None:
            raise UserError.not_found(user_id)

        rng = random.Random(user_id)
        now = utcnow()
        activities = [
            UserActivity(
                id=f"activity_{i + 1}",
                type=rng.choice(ACTIVITY_TYPES),
                description=f"Activity {i + 1} description",
                timestamp=now - timedelta(seconds=rng.uniform(0, 86400 * 30)),
                metadata={
                    "ip": f"192.168.1.{rng.randint(0, 254)}",
                    "userAgent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
                },
            )
            for i in range(30)
        ]
        return paginate(activities, pagination)
