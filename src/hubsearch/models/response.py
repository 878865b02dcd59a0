"""HTTP response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hubsearch.models.query import EntityType
from hubsearch.models.result import SearchResult


class SearchResponse(BaseModel):
    """Response body of ``POST /v1/search``."""

    request_id: str = Field(description="Unique request identifier")
    status: str = Field(default="completed", description="completed or no_results")
    query: str = Field(description="Trimmed search term")
    results: list[SearchResult] = Field(default_factory=list, description="Merged, ranked results")
    total: int = Field(default=0, description="Number of results returned")
    next_cursor: str | None = Field(default=None, description="Cursor for the next page")
    failed_sources: list[EntityType] = Field(default_factory=list, description="Sources that failed (degraded)")
    processing_time_ms: int = Field(default=0, description="Total processing time in ms")


class SuggestResponse(BaseModel):
    """Response body of ``GET /v1/suggest``."""

    query: str = Field(description="Partial term as received")
    suggestions: list[str] = Field(default_factory=list)


class RecentSearchesResponse(BaseModel):
    """Response body of the recent-search endpoints."""

    terms: list[str] = Field(default_factory=list, description="Most recent first")


class RecentSearchRequest(BaseModel):
    """Request body of ``POST /v1/recent``."""

    term: str = Field(min_length=1, max_length=500)
