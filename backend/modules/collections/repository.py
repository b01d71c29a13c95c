"""
In-memory collection storage, seeded with two collections.
"""

from datetime import timedelta
from typing import Optional

from shared.models import AuthUser, PaginatedResult, PaginationOptions
from shared.repository import InMemoryRepository, utcnow
from modules.users.repository import seed_users

from .models import Collection, CollectionType, CreateCollectionRequest


def seed_collections() -> list[Collection]:
    owners = {user.id: user.to_auth_user() for user in seed_users()}
    now = utcnow()
    return [
        Collection(
            id="marketing-resources",
            name="Marketing Resources",
            description="Brand guidelines, templates, and marketing materials",
            type=CollectionType.SHARED,
            owner=owners["user_2"],
            created_at=now - timedelta(days=45),
            updated_at=now - timedelta(hours=2),
            file_count=24,
            size=1288490188,
            tags=["marketing", "brand", "templates"],
        ),
        Collection(
            id="product-documentation",
            name="Product Documentation",
            description="Technical docs, user guides, and API references",
            type=CollectionType.PUBLIC,
            owner=owners["user_3"],
            created_at=now - timedelta(days=30),
            updated_at=now - timedelta(hours=1),
            file_count=156,
            size=2847392034,
            tags=["documentation", "api", "guides"],
        ),
    ]


class CollectionRepository(InMemoryRepository[Collection]):
    entity_name = "Collection"
    id_prefix = "col"

    def __init__(self, seed: Optional[list[Collection]] = None) -> None:
        super().__init__(seed_collections() if seed is None else seed)

    def find_by_owner_id(self, owner_id: str, pagination: PaginationOptions) -> PaginatedResult[Collection]:
        return self._filter(lambda c: c.owner.id == owner_id, pagination)

    def find_shared_with_user(self, user_id: str, pagination: PaginationOptions) -> PaginatedResult[Collection]:
        """Shared collections owned by someone else."""
        return self._filter(
            lambda c: c.type == CollectionType.SHARED and c.owner.id != user_id,
            pagination,
        )

    def create(self, owner: AuthUser, data: CreateCollectionRequest) -> Collection:
        now = utcnow()
        return self.add(
            Collection(
                id=self._new_id(),
                name=data.name,
                description=data.description or "",
                type=data.type,
                owner=owner,
                created_at=now,
                updated_at=now,
                tags=list(data.tags),
            )
        )

    def adjust_contents(self, collection_id: str, file_delta: int, size_delta: int) -> Optional[Collection]:
        """Move the file count and total size together, never below zero."""
        with self._lock:
            existing = self._items.get(collection_id)
            if existing is None:
                return None
            return self.update(
                collection_id,
                {
                    "file_count": max(0, existing.file_count + file_delta),
                    "size": max(0, existing.size + size_delta),
                },
            )
