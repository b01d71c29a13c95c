"""
Collection module exceptions.
"""

from shared.exceptions import ForbiddenError, NotFoundError, ValidationError


class CollectionNotFoundError(NotFoundError):
    """Raised when no collection has the requested id."""

    def __init__(self, collection_id: str):
        super().__init__(
            "Collection not found",
            code="COLLECTION_NOT_FOUND",
            details={"collectionId": collection_id},
        )


class CollectionAccessDeniedError(ForbiddenError):
    """Raised when a user acts on a collection they do not own."""

    def __init__(self, action: str):
        super().__init__(
            f"You do not have permission to {action} this collection",
            code="FORBIDDEN",
            details={"action": action},
        )


class FileNotInCollectionError(ValidationError):
    """Raised when removing a file the collection does not contain."""

    def __init__(self, collection_id: str, file_id: str):
        super().__init__(
            "File is not part of this collection",
            code="FILE_NOT_IN_COLLECTION",
            details={"collectionId": collection_id, "fileId": file_id},
        )
