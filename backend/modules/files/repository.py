"""
In-memory file metadata storage.
"""

import mimetypes
from datetime import timedelta
from typing import Any, Optional

from shared.models import AuthUser, PaginatedResult, PaginationOptions
from shared.repository import InMemoryRepository, paginate, utcnow
from modules.users.repository import seed_users

from .models import File, FileHistoryEntry, UploadFileRequest


HISTORY_ACTIONS = ["created", "renamed", "tagged", "metadata_updated", "shared"]


def seed_files() -> list[File]:
    owners = {user.id: user.to_auth_user() for user in seed_users()}
    now = utcnow()

    def file(
        file_id: str,
        name: str,
        type_: str,
        size: int,
        mime: str,
        owner: str,
        collection: Optional[str],
        age_days: int,
        tags: list[str],
        **metadata: Any,
    ) -> File:
        slug = name.lower().rsplit(".", 1)[0].replace(" ", "-")
        return File(
            id=file_id,
            name=name,
            type=type_,
            size=size,
            mime_type=mime,
            url=f"/files/{slug}.{type_}",
            thumbnail_url=f"/files/thumbnails/{slug}.jpg",
            collection_id=collection,
            owner=owners[owner],
            created_at=now - timedelta(days=age_days),
            updated_at=now - timedelta(days=age_days // 2),
            tags=tags,
            metadata=metadata,
        )

    return [
        file("file_1", "Project Requirements.pdf", "pdf", 2457600, "application/pdf",
             "user_2", "marketing-resources", 5, ["requirements", "project", "documentation"],
             version="1.2", author="Sarah Johnson", category="documentation"),
        file("file_2", "Brand Guidelines.sketch", "sketch", 15728640, "application/x-sketch",
             "user_3", "marketing-resources", 10, ["design", "branding", "guidelines"],
             version="2.0", author="Alex Rodriguez", category="design"),
        file("file_3", "API Reference.md", "md", 48213, "text/markdown",
             "user_3", "product-documentation", 20, ["api", "reference"],
             version="3.1", author="Alex Rodriguez", category="documentation"),
        file("file_4", "Quarterly Report.xlsx", "xlsx", 734003,
             "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
             "user_5", None, 3, ["finance", "report"], category="finance"),
        file("file_5", "Team Photo.png", "png", 3145728, "image/png",
             "user_1", None, 14, ["team", "photo"], width=1920, height=1080),
        file("file_6", "Onboarding Checklist.docx", "docx", 88064,
             "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
             "user_4", "product-documentation", 8, ["onboarding", "hr"], category="hr"),
    ]


class FileRepository(InMemoryRepository[File]):
    entity_name = "File"
    id_prefix = "file"

    def __init__(self, seed: Optional[list[File]] = None) -> None:
        super().__init__(seed_files() if seed is None else seed)

    def find_by_collection_id(self, collection_id: str, pagination: PaginationOptions) -> PaginatedResult[File]:
        return self._filter(lambda f: f.collection_id == collection_id, pagination)

    def detach_collection(self, collection_id: str) -> list[str]:
        """Clear ``collection_id`` on every file in the collection; returns the ids touched."""
        with self._lock:
            member_ids = [f.id for f in self._items.values() if f.collection_id == collection_id]
            for file_id in member_ids:
                self.update(file_id, {"collection_id": None})
        return member_ids

    def find_by_owner_id(self, owner_id: str, pagination: PaginationOptions) -> PaginatedResult[File]:
        return self._filter(lambda f: f.owner.id == owner_id, pagination)

    def find_recent(self, owner_id: str, limit: int = 10) -> list[File]:
        """The owner's files, most recently updated first."""
        with self._lock:
            owned = [f for f in self._items.values() if f.owner.id == owner_id]
        owned.sort(key=lambda f: f.updated_at, reverse=True)
        return owned[:limit]

    def create(self, owner: AuthUser, data: UploadFileRequest) -> File:
        file_id = self._new_id()
        now = utcnow()
        mime_type = data.mime_type or mimetypes.guess_type(data.name)[0] or "application/octet-stream"
        return self.add(
            File(
                id=file_id,
                name=data.name,
                type=data.type,
                size=data.size,
                mime_type=mime_type,
                url=f"/files/{file_id}",
                thumbnail_url=f"/files/thumbnails/{file_id}.jpg",
                collection_id=data.collection_id,
                owner=owner,
                created_at=now,
                updated_at=now,
                tags=list(data.tags),
                metadata=dict(data.metadata),
            )
        )

    def get_history(self, file_id: str, pagination: PaginationOptions) -> Optional[PaginatedResult[FileHistoryEntry]]:
        """Synthetic version history, oldest first. None if the file is unknown."""
        stored = self.find_by_id(file_id)
        if stored is None:
            return None

        span = max(stored.updated_at - stored.created_at, timedelta(hours=len(HISTORY_ACTIONS)))
        step = span / len(HISTORY_ACTIONS)
        entries = [
            FileHistoryEntry(
                version=i + 1,
                action=action,
                user_id=stored.owner.id,
                timestamp=stored.created_at + step * i,
                changes={"name": stored.name} if action in ("created", "renamed") else {},
            )
            for i, action in enumerate(HISTORY_ACTIONS)
        ]
        return paginate(entries, pagination)
