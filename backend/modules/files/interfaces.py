"""
File module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthUser, PaginatedResult, PaginationOptions

from .models import File, FileHistoryEntry, FilePreview, UpdateFileRequest, UploadFileRequest


@runtime_checkable
class IFileService(Protocol):
    """Interface for file metadata operations."""

    async def get_all_files(self, pagination: PaginationOptions) -> PaginatedResult[File]:
        ...

    async def get_file_by_id(self, file_id: str) -> File:
        """
        Raises:
            FileRecordNotFoundError: If no file has this id
        """
        ...

    async def get_recent_files(self, user_id: str, limit: int = 10) -> list[File]:
        ...

    async def upload_file(self, actor: AuthUser, data: UploadFileRequest) -> File:
        """
        Record an uploaded file's metadata.

        Raises:
            UploadLimitError: If size or metadata exceed the configured limits
            CollectionNotFoundError: If ``data.collection_id`` is unknown
        """
        ...

    async def update_file(self, file_id: str, actor: AuthUser, changes: UpdateFileRequest) -> File:
        ...

    async def delete_file(self, file_id: str, actor: AuthUser) -> None:
        ...

    async def get_file_preview(self, file_id: str) -> FilePreview:
        ...

    async def get_file_history(
        self, file_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[FileHistoryEntry]:
        ...
