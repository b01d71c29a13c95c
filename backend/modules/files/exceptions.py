"""
File module exceptions.
"""

from shared.exceptions import ForbiddenError, NotFoundError


class FileRecordNotFoundError(NotFoundError):
    """Raised when no file has the requested id."""

    def __init__(self, file_id: str):
        super().__init__("File not found", code="FILE_NOT_FOUND", details={"fileId": file_id})


class FileAccessDeniedError(ForbiddenError):
    """Raised when a user modifies a file they neither own nor administer."""

    def __init__(self, action: str):
        super().__init__(
            f"You do not have permission to {action} this file",
            code="FORBIDDEN",
            details={"action": action},
        )
