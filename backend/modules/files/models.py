"""
File module data models.

Files are metadata only; nothing is stored on disk.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from shared.models import AuthUser, CamelModel


class File(CamelModel):
    id: str
    name: str
    type: str = Field(..., description="Short type such as pdf, png, docx")
    size: int = Field(..., ge=0, description="Size in bytes")
    mime_type: str
    url: str
    thumbnail_url: Optional[str] = None
    collection_id: Optional[str] = None
    owner: AuthUser
    created_at: datetime
    updated_at: datetime
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class UploadFileRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=50)
    size: int = Field(..., ge=0)
    mime_type: Optional[str] = None
    collection_id: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class UpdateFileRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    tags: Optional[list[str]] = None
    metadata: Optional[dict[str, Any]] = None


class FilePreview(CamelModel):
    file_id: str
    preview_url: str
    mime_type: str


class FileHistoryEntry(CamelModel):
    version: int
    action: str
    user_id: str
    timestamp: datetime
    changes: dict[str, Any] = Field(default_factory=dict)
