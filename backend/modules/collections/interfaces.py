"""
Collection module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthUser, PaginatedResult, PaginationOptions
from modules.files.models import File

from .models import Collection, CreateCollectionRequest, UpdateCollectionRequest


@runtime_checkable
class ICollectionService(Protocol):
    """Interface for collection operations."""

    async def get_all_collections(self, pagination: PaginationOptions) -> PaginatedResult[Collection]:
        ...

    async def get_collection_by_id(self, collection_id: str) -> Collection:
        """
        Raises:
            CollectionNotFoundError: If no collection has this id
        """
        ...

    async def create_collection(self, actor: AuthUser, data: CreateCollectionRequest) -> Collection:
        ...

    async def update_collection(
        self, collection_id: str, actor: AuthUser, changes: UpdateCollectionRequest
    ) -> Collection:
        """
        Raises:
            CollectionNotFoundError: If no collection has this id
            CollectionAccessDeniedError: If ``actor`` does not own it
        """
        ...

    async def delete_collection(self, collection_id: str, actor: AuthUser) -> None:
        ...

    async def get_shared_collections(
        self, user_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[Collection]:
        ...

    async def get_collection_files(
        self, collection_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[File]:
        ...

    async def add_file_to_collection(self, collection_id: str, file_id: str, actor: AuthUser) -> Collection:
        ...

    async def remove_file_from_collection(self, collection_id: str, file_id: str, actor: AuthUser) -> Collection:
        ...
