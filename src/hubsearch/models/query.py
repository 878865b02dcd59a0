"""Query and search request models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class EntityType(str, Enum):
    """Record types the engine can search."""

    CONTENT = "content"
    GROUP = "group"
    PROFILE = "profile"


class SearchType(str, Enum):
    """Search target: a single entity type or all of them."""

    CONTENT = "content"
    GROUP = "group"
    PROFILE = "profile"
    ALL = "all"

    @property
    def entity_types(self) -> list[EntityType]:
        """Entity types targeted by this search type, in merge order."""
        if self is SearchType.ALL:
            return list(EntityType)
        return [EntityType(self.value)]


class SortBy(str, Enum):
    """Ordering applied to the merged result list."""

    RELEVANCE = "relevance"
    NEWEST = "newest"
    POPULAR = "popular"


class DateRange(BaseModel):
    """Inclusive creation-time window."""

    start: datetime = Field(description="Earliest accepted creation time (inclusive)")
    end: datetime = Field(description="Latest accepted creation time (inclusive)")

    @field_validator("start", "end")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        # Naive bounds are UTC, matching record timestamp normalization.
        return v.replace(tzinfo=UTC) if v.tzinfo is None else v

    @model_validator(mode="after")
    def _check_order(self) -> DateRange:
        if self.start > self.end:
            raise ValueError("date_range.start must not be after date_range.end")
        return self


class SearchFilters(BaseModel):
    """Optional search constraints. An unset field means "no constraint"."""

    scope_id: str | None = Field(default=None, description="Community the content must belong to")
    date_range: DateRange | None = Field(default=None, description="Creation-time window")
    tags: set[str] | None = Field(default=None, description="Accept records sharing at least one tag")
    author_id: str | None = Field(default=None, description="Author / creator identifier")
    min_popularity: int | None = Field(default=None, ge=0, description="Minimum popularity metric")


class SearchQuery(BaseModel):
    """A single search request."""

    search_term: str = Field(description="Free-text search term")
    type: SearchType = Field(default=SearchType.ALL, description="Entity type to search, or 'all'")
    filters: SearchFilters | None = Field(default=None, description="Optional search filters")
    sort_by: SortBy = Field(default=SortBy.RELEVANCE, description="Ordering of the merged results")
    page_size: int = Field(default=20, ge=1, le=100, description="Candidate window size per entity type")
    cursor: str | None = Field(default=None, description="Opaque cursor returned by a previous page")

    @field_validator("search_term", mode="before")
    @classmethod
    def _strip_term(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @property
    def is_blank(self) -> bool:
        return not self.search_term
