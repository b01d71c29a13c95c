"""
Base repository class for in-memory data access.

Provides a common abstraction layer for all repositories: an insertion-ordered
dict keyed by id, guarded by a lock so that FastAPI's threadpool and the event
loop never observe a half-applied mutation.

Conventions shared by every repository:
- ``update`` on a missing id returns None; the service decides what that means.
- ``delete`` on a missing id raises NotFoundError.
- Repositories perform no authorization.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel

from .exceptions import NotFoundError
from .models import PaginatedResult, PaginationOptions


T = TypeVar("T", bound=BaseModel)


def generate_id(prefix: str) -> str:
    """Create a fresh id such as ``col_3f2a9c1b0d4e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def paginate(items: list[T], pagination: PaginationOptions) -> PaginatedResult[T]:
    """Slice an already-filtered list into a PaginatedResult."""
    start = pagination.offset
    return PaginatedResult[Any](
        items=items[start : start + pagination.limit],
        total=len(items),
        page=pagination.page,
        limit=pagination.limit,
    )


class InMemoryRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses set ``entity_name`` and ``id_prefix`` and may pass seed
    records to the constructor. Entities are pydantic models; updates
    replace the stored instance with a copy, so callers never share
    mutable state with the store.

    Example:
        class CollectionRepository(InMemoryRepository[Collection]):
            entity_name = "Collection"
            id_prefix = "col"

            def find_by_owner_id(self, owner_id, pagination):
                return self._filter(lambda c: c.owner.id == owner_id, pagination)
    """

    entity_name: str = "Resource"
    id_prefix: str = "id"

    def __init__(self, seed: Optional[Iterable[T]] = None) -> None:
        self._lock = threading.RLock()
        self._items: dict[str, T] = {}
        for item in seed or ():
            self._items[item.id] = item

    def find_all(self, pagination: PaginationOptions) -> PaginatedResult[T]:
        with self._lock:
            items = list(self._items.values())
        return paginate(items, pagination)

    def find_by_id(self, entity_id: str) -> Optional[T]:
        with self._lock:
            return self._items.get(entity_id)

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def add(self, entity: T) -> T:
        """Store a fully built entity under its own id."""
        with self._lock:
            self._items[entity.id] = entity
        return entity

    def update(self, entity_id: str, changes: dict[str, Any]) -> Optional[T]:
        """
        Apply ``changes`` to the stored entity and bump ``updated_at``.

        The merged record is validated before it replaces the stored one, so
        a bad change raises pydantic.ValidationError and leaves storage as it
        was. Returns None when no entity has this id.
        """
        with self._lock:
            existing = self._items.get(entity_id)
            if existing is None:
                return None
            fields = {k: v for k, v in changes.items() if k in type(existing).model_fields}
            if "updated_at" in type(existing).model_fields:
                fields["updated_at"] = utcnow()
            model = type(existing)
            updated = model.model_validate({**existing.model_dump(), **fields})
            self._items[entity_id] = updated
            return updated

    def delete(self, entity_id: str) -> None:
        with self._lock:
            if entity_id not in self._items:
                raise NotFoundError.resource(self.entity_name, entity_id)
            del self._items[entity_id]

    def _filter(
        self,
        predicate: Callable[[T], bool],
        pagination: PaginationOptions,
    ) -> PaginatedResult[T]:
        with self._lock:
            matched = [item for item in self._items.values() if predicate(item)]
        return paginate(matched, pagination)

    def _new_id(self) -> str:
        return generate_id(self.id_prefix)
