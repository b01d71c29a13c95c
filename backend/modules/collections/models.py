"""
Collection module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from shared.models import AuthUser, CamelModel


class CollectionType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    SHARED = "shared"


class PermissionLevel(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    ADMIN = "admin"


class CollectionPermission(CamelModel):
    user_id: str
    permission: PermissionLevel
    granted_at: datetime


class Collection(CamelModel):
    """A named group of files owned by one user."""

    id: str
    name: str
    description: str = ""
    type: CollectionType = CollectionType.PRIVATE
    owner: AuthUser
    created_at: datetime
    updated_at: datetime
    file_count: int = Field(default=0, ge=0)
    size: int = Field(default=0, ge=0, description="Total size in bytes")
    tags: list[str] = Field(default_factory=list)
    permissions: list[CollectionPermission] = Field(default_factory=list)


class CreateCollectionRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    type: CollectionType = CollectionType.PRIVATE
    tags: list[str] = Field(default_factory=list, max_length=20)


class UpdateCollectionRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    type: Optional[CollectionType] = None
    tags: Optional[list[str]] = Field(None, max_length=20)


class AddFileRequest(CamelModel):
    file_id: str = Field(..., min_length=1)
