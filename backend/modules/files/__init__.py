"""
Files module.

File metadata records. Uploads store metadata only and are checked
against the configured upload limits.

Public API:
- IFileService: Interface for file operations
- File: File record
- File exceptions: FileRecordNotFoundError, FileAccessDeniedError
"""

from .interfaces import IFileService
from .models import File, FileHistoryEntry, FilePreview
from .exceptions import FileAccessDeniedError, FileRecordNotFoundError

__all__ = [
    # Interface
    "IFileService",
    # Models
    "File",
    "FileHistoryEntry",
    "FilePreview",
    # Exceptions
    "FileAccessDeniedError",
    "FileRecordNotFoundError",
]
