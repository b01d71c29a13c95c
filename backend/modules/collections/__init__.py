"""
Collections module.

Named groups of files with an owner, a visibility type and per-user
permissions.

Public API:
- ICollectionService: Interface for collection operations
- Collection: Collection record
- Collection exceptions: CollectionNotFoundError, etc.
"""

from .interfaces import ICollectionService
from .models import Collection, CollectionType, PermissionLevel
from .exceptions import CollectionAccessDeniedError, CollectionNotFoundError, FileNotInCollectionError

__all__ = [
    # Interface
    "ICollectionService",
    # Models
    "Collection",
    "CollectionType",
    "PermissionLevel",
    # Exceptions
    "CollectionAccessDeniedError",
    "CollectionNotFoundError",
    "FileNotInCollectionError",
]
