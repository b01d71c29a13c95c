"""
In-memory user storage.

Seeded with a fixed set of accounts so the frontend always has someone to
log in as. One seeded account is inactive.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from shared.models import User, UserRole
from shared.repository import InMemoryRepository, utcnow


MOCK_ADMIN_ID = "user_1"


def _days_ago(days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)


def _avatar(seed: str) -> str:
    return f"https://api.dicebear.com/7.x/initials/svg?seed={seed}"


def seed_users() -> list[User]:
    """Build a fresh copy of the mock accounts."""
    return [
        User(
            id=MOCK_ADMIN_ID,
            email="admin@banedonv.com",
            password="admin123",
            name="BanedonV Admin",
            role=UserRole.ADMIN,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            avatar=_avatar("BanedonVAdmin"),
        ),
        User(
            id="user_2",
            email="sarah.johnson@banedonv.com",
            password="password",
            name="Sarah Johnson",
            role=UserRole.MANAGER,
            last_login=_days_ago(2),
            created_at=_days_ago(180),
            updated_at=_days_ago(1),
            avatar=_avatar("SarahJohnson"),
        ),
        User(
            id="user_3",
            email="alex.rodriguez@banedonv.com",
            password="password",
            name="Alex Rodriguez",
            role=UserRole.ADMIN,
            last_login=_days_ago(3),
            created_at=_days_ago(200),
            updated_at=_days_ago(1),
            avatar=_avatar("AlexRodriguez"),
        ),
        User(
            id="user_4",
            email="emma.davis@banedonv.com",
            password="password",
            name="Emma Davis",
            role=UserRole.USER,
            last_login=_days_ago(4),
            created_at=_days_ago(150),
            updated_at=_days_ago(1),
            avatar=_avatar("EmmaDavis"),
        ),
        User(
            id="user_5",
            email="user@banedonv.com",
            password="user123",
            name="Demo User",
            role=UserRole.USER,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            avatar=_avatar("DemoUser"),
        ),
        User(
            id="user_6",
            email="former.employee@banedonv.com",
            password="password",
            name="Former Employee",
            role=UserRole.USER,
            active=False,
            last_login=_days_ago(90),
            created_at=_days_ago(400),
            updated_at=_days_ago(60),
            avatar=_avatar("FormerEmployee"),
        ),
    ]


class UserRepository(InMemoryRepository[User]):
    """User storage keyed by id, with a case-insensitive email lookup."""

    entity_name = "User"
    id_prefix = "user"

    def __init__(self, seed: Optional[list[User]] = None) -> None:
        super().__init__(seed_users() if seed is None else seed)

    def find_by_email(self, email: str) -> Optional[User]:
        needle = email.strip().lower()
        with self._lock:
            for user in self._items.values():
                if user.email.lower() == needle:
                    return user
        return None

    def create(self, data: dict[str, Any]) -> User:
        now = utcnow()
        user = User(
            id=self._new_id(),
            email=data["email"],
            password=data["password"],
            name=data["name"],
            role=data.get("role", UserRole.USER),
            active=True,
            created_at=now,
            updated_at=now,
            avatar=_avatar(data["name"].replace(" ", "")),
        )
        return self.add(user)
