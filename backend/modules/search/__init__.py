"""
Search module.

Synthetic full-text search over files and collections, plus per-user
search history.

Public API:
- ISearchService: Interface for search operations
- SearchQuery / SearchResult: Query parameters and result items
- SearchQueryRequiredError: Raised for a blank query
"""

from .interfaces import ISearchService
from .models import SearchHistoryEntry, SearchQuery, SearchResult, SearchResultType
from .exceptions import SearchQueryRequiredError

__all__ = [
    # Interface
    "ISearchService",
    # Models
    "SearchHistoryEntry",
    "SearchQuery",
    "SearchResult",
    "SearchResultType",
    # Exceptions
    "SearchQueryRequiredError",
]
