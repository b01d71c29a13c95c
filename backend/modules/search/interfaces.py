"""
Search module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import PaginatedResult, PaginationOptions

from .models import SearchHistoryEntry, SearchQuery, SearchResult


@runtime_checkable
class ISearchService(Protocol):
    """Interface for search over files and collections."""

    async def search(self, query: SearchQuery, pagination: PaginationOptions) -> PaginatedResult[SearchResult]:
        """
        Run a search and return results ordered by descending score.

        Raises:
            SearchQueryRequiredError: If the query text is blank
        """
        ...

    async def get_search_suggestions(self, query: str) -> list[str]:
        """At most five completions; empty for a blank query."""
        ...

    async def save_search(self, user_id: str, query: str) -> SearchHistoryEntry:
        ...

    async def get_search_history(
        self, user_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[SearchHistoryEntry]:
        """Saved searches for one user, most recent first."""
        ...
