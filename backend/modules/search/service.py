"""
Search service implementation.

Results are synthesized from the query text: ten file hits and five
collection hits per search. Scores and dates are drawn from a generator
seeded with the query, so the same query always yields the same result
set and the same ordering.
"""

import logging
import random
import threading
from collections import defaultdict
from datetime import timedelta
from typing import Optional

from shared.exceptions import ValidationError
from shared.models import PaginatedResult, PaginationOptions
from shared.repository import generate_id, paginate, utcnow

from .exceptions import SearchQueryRequiredError
from .interfaces import ISearchService
from .models import SearchHistoryEntry, SearchOwner, SearchQuery, SearchResult, SearchResultType

FILE_RESULTS = 10
COLLECTION_RESULTS = 5
MAX_SUGGESTIONS = 5
HISTORY_LIMIT = 100

FILE_EXTENSIONS = ("pdf", "docx", "png", "xlsx", "pptx")
FILE_MIME_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "png": "image/png",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}
SUGGESTION_SUFFIXES = (
    "documents",
    "files",
    "collection",
    "project",
    "report",
    "presentation",
    "data",
    "analysis",
)


def _owner(index: int) -> SearchOwner:
    return SearchOwner(id=f"user_{index}", name=f"User {index}", email=f"user{index}@example.com")


class SearchService(ISearchService):
    """Implementation of the search service."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._history: dict[str, list[SearchHistoryEntry]] = defaultdict(list)
        self._lock = threading.Lock()

    def _candidates(self, text: str) -> list[SearchResult]:
        rng = random.Random(text)
        now = utcnow()
        results: list[SearchResult] = []

        for i in range(FILE_RESULTS):
            extension = FILE_EXTENSIONS[i % len(FILE_EXTENSIONS)]
            results.append(SearchResult(
                id=f"file_{i + 1}",
                title=f"File {i + 1} - {text}",
                content=f'This is a sample file that matches the search query "{text}".',
                type=SearchResultType.FILE,
                score=round(rng.uniform(0.6, 1.0), 4),
                highlights=[f"...matches {text}...", f"...relevant to {text}..."],
                metadata={
                    "fileName": f"file_{i + 1}.{extension}",
                    "size": rng.randint(1_000, 10_000_000),
                    "mimeType": FILE_MIME_TYPES[extension],
                    "collectionId": f"collection_{(i % 3) + 1}",
                    "owner": _owner((i % 5) + 1).model_dump(),
                    "createdAt": now - timedelta(seconds=rng.uniform(0, 90 * 86400)),
                    "tags": [f"tag{i + 1}", "search-tag"],
                },
            ))

        for i in range(COLLECTION_RESULTS):
            results.append(SearchResult(
                id=f"collection_{i + 1}",
                title=f"Collection {i + 1} - {text}",
                content=f'This collection contains files related to "{text}".',
                type=SearchResultType.COLLECTION,
                score=round(rng.uniform(0.7, 1.0), 4),
                highlights=[f"...collection about {text}..."],
                metadata={
                    "fileCount": rng.randint(5, 50),
                    "size": rng.randint(1_000_000, 100_000_000),
                    "owner": _owner((i % 3) + 1).model_dump(),
                    "createdAt": now - timedelta(seconds=rng.uniform(0, 90 * 86400)),
                    "tags": [f"collection-tag{i + 1}"],
                },
            ))

        return results

    @staticmethod
    def _matches(result: SearchResult, query: SearchQuery) -> bool:
        meta = result.metadata

        if query.type and result.type != query.type:
            return False
        if query.collection_id and meta.get("collectionId") != query.collection_id:
            return False
        if query.owner and query.owner not in (meta["owner"]["id"], meta["owner"]["email"]):
            return False
        if query.tags and not set(query.tags) & set(meta.get("tags", [])):
            return False
        if query.file_type and result.type == SearchResultType.FILE:
            if not meta["fileName"].endswith(f".{query.file_type.lstrip('.')}"):
                return False
        if query.date_range:
            if not query.date_range.start <= meta["createdAt"] <= query.date_range.end:
                return False
        return True

    async def search(self, query: SearchQuery, pagination: PaginationOptions) -> PaginatedResult[SearchResult]:
        text = query.query.strip()
        if not text:
            raise SearchQueryRequiredError()

        hits = [r for r in self._candidates(text) if self._matches(r, query)]
        hits.sort(key=lambda r: r.score, reverse=True)
        result = paginate(hits, pagination)

        self._logger.info(
            "Search performed",
            extra={
                "query": text,
                "type": query.type.value if query.type else None,
                "total": result.total,
                "page": result.page,
                "limit": result.limit,
            },
        )
        return result

    async def get_search_suggestions(self, query: str) -> list[str]:
        text = (query or "").strip()
        if not text:
            return []
        return [f"{text} {suffix}" for suffix in SUGGESTION_SUFFIXES][:MAX_SUGGESTIONS]

    async def save_search(self, user_id: str, query: str) -> SearchHistoryEntry:
        if not user_id:
            raise ValidationError.required_field("userId")
        text = (query or "").strip()
        if not text:
            raise SearchQueryRequiredError()

        entry = SearchHistoryEntry(
            id=generate_id("search"),
            query=text,
            timestamp=utcnow(),
            results_count=FILE_RESULTS + COLLECTION_RESULTS,
        )
        with self._lock:
            history = self._history[user_id]
            history.insert(0, entry)
            del history[HISTORY_LIMIT:]

        self._logger.info("Search saved", extra={"user_id": user_id, "query": text})
        return entry

    async def get_search_history(
        self, user_id: str, pagination: PaginationOptions
    ) -> PaginatedResult[SearchHistoryEntry]:
        if not user_id:
            raise ValidationError.required_field("userId")
        with self._lock:
            entries = list(self._history.get(user_id, ()))
        return paginate(entries, pagination)
