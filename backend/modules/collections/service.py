"""
Collection service implementation.

Only a collection's owner may update or delete it. Adding and removing
files is allowed for the owner or an admin.
"""

import logging
from typing import Optional

from shared.exceptions import ValidationError
from shared.models import AuthUser, PaginatedResult, PaginationOptions, UserRole
from modules.files.exceptions import FileRecordNotFoundError
from modules.files.models import File
from modules.files.repository import FileRepository

from .exceptions import CollectionAccessDeniedError, CollectionNotFoundError, FileNotInCollectionError
from .interfaces import ICollectionService
from .models import Collection, CreateCollectionRequest, UpdateCollectionRequest
from .repository import CollectionRepository


class CollectionService(ICollectionService):
    """Implementation of the collection service."""

    def __init__(
        self,
        repository: CollectionRepository,
        files: FileRepository,
        logger: Optional[logging.Logger] = None,
    ):
        self._collections = repository
        self._files = files
        self._logger = logger or logging.getLogger(__name__)

    def _load(self, collection_id: str) -> Collection:
        if not collection_id:
            raise ValidationError.required_field("collectionId")
        collection = self._collections.find_by_id(collection_id)
        if collection is None:
            raise CollectionNotFoundError(collection_id)
        return collection

    @staticmethod
    def _check_owner(collection: Collection, actor: AuthUser, action: str) -> None:
        if collection.owner.id != actor.id:
            raise CollectionAccessDeniedError(action)

    @staticmethod
    def _check_owner_or_admin(collection: Collection, actor: AuthUser, action: str) -> None:
        if collection.owner.id != actor.id and actor.role != UserRole.ADMIN:
            raise CollectionAccessDeniedError(action)

    async def get_all_collections(self, pagination: PaginationOptions) -> PaginatedResult[Collection]:
        return self._collections.find_all(pagination)

    async def get_collection_by_id(self, collection_id: str) -> Collection:
        return self._load(collection_id)

    async def create_collection(self, actor: AuthUser, data: CreateCollectionRequest) -> Collection:
        if not data.name.strip():
            raise ValidationError.required_field("name")

        collection = self._collections.create(actor, data)
        self._logger.info(
            "Collection created",
            extra={"collection_id": collection.id, "user_id": actor.id},
        )
        return collection

    async def update_collection(
        self, collection_id: str, actor: AuthUser, changes: UpdateCollectionRequest
    ) -> Collection:
        collection = self._load(collection_id)
        self._check_owner(collection, actor, "update")

        updated = self._collections.update(collection_id, changes.model_dump(exclude_unset=True, exclude_none=True))
        if updated is None:
            raise CollectionNotFoundError(collection_id)

        self._logger.info("Collection updated", extra={"collection_id": collection_id, "user_id": actor.id})
        return updated

    async def delete_collection(self, collection_id: str, actor: AuthUser) -> None:
        collection = self._load(collection_id)
        self._check_owner(collection, actor, "delete")

        self._collections.delete(collection_id)
        detached = self._files.detach_collection(collection_id)
        self._logger.info(
            "Collection deleted",
            extra={"collection_id": collection_id, "user_id": actor.id, "files_detached": len(detached)},
        )

    async def get_shared_collections(
        self, user_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[Collection]:
        if not user_id:
            raise ValidationError.required_field("userId")
        return self._collections.find_shared_with_user(user_id, pagination)

    async def get_collection_files(
        self, collection_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[File]:
        self._load(collection_id)
        return self._files.find_by_collection_id(collection_id, pagination)

    async def add_file_to_collection(self, collection_id: str, file_id: str, actor: AuthUser) -> Collection:
        collection = self._load(collection_id)
        self._check_owner_or_admin(collection, actor, "add files to")

        stored = self._files.find_by_id(file_id)
        if stored is None:
            raise FileRecordNotFoundError(file_id)
        if stored.collection_id == collection_id:
            return collection

        if stored.collection_id:
            self._collections.adjust_contents(stored.collection_id, -1, -stored.size)
        self._files.update(file_id, {"collection_id": collection_id})
        updated = self._collections.adjust_contents(collection_id, 1, stored.size)

        self._logger.info(
            "File added to collection",
            extra={"collection_id": collection_id, "file_id": file_id, "user_id": actor.id},
        )
        return updated or collection

    async def remove_file_from_collection(self, collection_id: str, file_id: str, actor: AuthUser) -> Collection:
        collection = self._load(collection_id)
        self._check_owner_or_admin(collection, actor, "remove files from")

        stored = self._files.find_by_id(file_id)
        if stored is None:
            raise FileRecordNotFoundError(file_id)
        if stored.collection_id != collection_id:
            raise FileNotInCollectionError(collection_id, file_id)

        self._files.update(file_id, {"collection_id": None})
        updated = self._collections.adjust_contents(collection_id, -1, -stored.size)

        self._logger.info(
            "File removed from collection",
            extra={"collection_id": collection_id, "file_id": file_id, "user_id": actor.id},
        )
        return updated or collection
