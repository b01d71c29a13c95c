"""
Search module data models.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import Field, model_validator

from shared.models import CamelModel


class SearchResultType(str, Enum):
    FILE = "file"
    COLLECTION = "collection"


class DateRange(CamelModel):
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _ordered(self) -> "DateRange":
        # Naive timestamps are taken as UTC.
        if self.start.tzinfo is None:
            self.start = self.start.replace(tzinfo=timezone.utc)
        if self.end.tzinfo is None:
            self.end = self.end.replace(tzinfo=timezone.utc)
        if self.start > self.end:
            raise ValueError("dateRange.start must not be after dateRange.end")
        return self


class SearchQuery(CamelModel):
    """Parsed search parameters. Every filter is optional except ``query``."""

    query: str
    type: Optional[SearchResultType] = None
    collection_id: Optional[str] = None
    owner: Optional[str] = Field(None, description="Owner id or email")
    tags: list[str] = Field(default_factory=list)
    file_type: Optional[str] = Field(None, description="File extension, applied to file results only")
    date_range: Optional[DateRange] = None


class SearchOwner(CamelModel):
    id: str
    name: str
    email: str


class SearchResult(CamelModel):
    id: str
    title: str
    content: str
    type: SearchResultType
    score: float = Field(..., ge=0.0, le=1.0)
    highlights: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class SaveSearchRequest(CamelModel):
    query: str


class SearchHistoryEntry(CamelModel):
    id: str
    query: str
    timestamp: datetime
    results_count: int = 0
