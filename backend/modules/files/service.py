"""
File service implementation.

Uploads are metadata-only: the client describes the file and the service
records it, enforcing the same size and metadata limits a multipart
parser would.
"""

import logging
from typing import TYPE_CHECKING, Optional

from modules.collections.exceptions import CollectionNotFoundError
from shared.config import Settings, get_settings
from shared.exceptions import UploadLimitError, ValidationError
from shared.models import AuthUser, PaginatedResult, PaginationOptions, UserRole

from .exceptions import FileAccessDeniedError, FileRecordNotFoundError
from .interfaces import IFileService
from .models import File, FileHistoryEntry, FilePreview, UpdateFileRequest, UploadFileRequest
from .repository import FileRepository

if TYPE_CHECKING:
    from modules.collections.repository import CollectionRepository


class FileService(IFileService):
    """Implementation of the file service."""

    def __init__(
        self,
        repository: FileRepository,
        collections: Optional["CollectionRepository"] = None,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._files = repository
        self._collections = collections
        self._settings = settings or get_settings()
        self._logger = logger or logging.getLogger(__name__)

    def _load(self, file_id: str) -> File:
        if not file_id:
            raise ValidationError.required_field("fileId")
        stored = self._files.find_by_id(file_id)
        if stored is None:
            raise FileRecordNotFoundError(file_id)
        return stored

    @staticmethod
    def _check_can_modify(stored: File, actor: AuthUser, action: str) -> None:
        if stored.owner.id != actor.id and actor.role != UserRole.ADMIN:
            raise FileAccessDeniedError(action)

    def _check_upload_limits(self, data: UploadFileRequest) -> None:
        s = self._settings
        if data.size > s.max_upload_bytes:
            raise UploadLimitError(
                "LIMIT_FILE_SIZE",
                "File too large",
                {"maxBytes": s.max_upload_bytes, "size": data.size},
            )
        if len(data.metadata) > s.max_metadata_fields:
            raise UploadLimitError(
                "LIMIT_FIELD_COUNT",
                "Too many fields",
                {"maxFields": s.max_metadata_fields},
            )
        for key, value in data.metadata.items():
            if len(key) > s.max_field_name_length:
                raise UploadLimitError(
                    "LIMIT_FIELD_KEY",
                    "Field name too long",
                    {"field": key[:50], "maxLength": s.max_field_name_length},
                )
            if len(str(value)) > s.max_field_value_length:
                raise UploadLimitError(
                    "LIMIT_FIELD_VALUE",
                    "Field value too long",
                    {"field": key, "maxLength": s.max_field_value_length},
                )

    async def get_all_files(self, pagination: PaginationOptions) -> PaginatedResult[File]:
        return self._files.find_all(pagination)

    async def get_file_by_id(self, file_id: str) -> File:
        return self._load(file_id)

    async def get_recent_files(self, user_id: str, limit: int = 10) -> list[File]:
        if not user_id:
            raise ValidationError.required_field("userId")
        return self._files.find_recent(user_id, limit)

    async def upload_file(self, actor: AuthUser, data: UploadFileRequest) -> File:
        self._check_upload_limits(data)

        if data.collection_id and self._collections is not None:
            if self._collections.find_by_id(data.collection_id) is None:
                raise CollectionNotFoundError(data.collection_id)

        stored = self._files.create(actor, data)
        if stored.collection_id and self._collections is not None:
            self._collections.adjust_contents(stored.collection_id, 1, stored.size)

        self._logger.info(
            "File uploaded",
            extra={"file_id": stored.id, "user_id": actor.id, "file_name": stored.name, "size": stored.size},
        )
        return stored

    async def update_file(self, file_id: str, actor: AuthUser, changes: UpdateFileRequest) -> File:
        stored = self._load(file_id)
        self._check_can_modify(stored, actor, "update")

        fields = changes.model_dump(exclude_unset=True, exclude_none=True)
        if "metadata" in fields:
            fields["metadata"] = {**stored.metadata, **fields["metadata"]}

        updated = self._files.update(file_id, fields)
        if updated is None:
            raise FileRecordNotFoundError(file_id)

        self._logger.info("File updated", extra={"file_id": file_id, "user_id": actor.id})
        return updated

    async def delete_file(self, file_id: str, actor: AuthUser) -> None:
        stored = self._load(file_id)
        self._check_can_modify(stored, actor, "delete")

        self._files.delete(file_id)
        if stored.collection_id and self._collections is not None:
            self._collections.adjust_contents(stored.collection_id, -1, -stored.size)

        self._logger.info("File deleted", extra={"file_id": file_id, "user_id": actor.id})

    async def get_file_preview(self, file_id: str) -> FilePreview:
        stored = self._load(file_id)
        return FilePreview(
            file_id=stored.id,
            preview_url=stored.thumbnail_url or stored.url,
            mime_type=stored.mime_type,
        )

    async def get_file_history(
        self, file_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[FileHistoryEntry]:
        history = self._files.get_history(file_id, pagination)
        if history is None:
            raise FileRecordNotFoundError(file_id)
        return history
