"""
Search module exceptions.
"""

from shared.exceptions import ValidationError


class SearchQueryRequiredError(ValidationError):
    """Raised when a search or saved search has no query text."""

    def __init__(self):
        super().__init__(
            "Search query is required",
            code="VALIDATION_REQUIRED_FIELD",
            details={"field": "q"},
        )
