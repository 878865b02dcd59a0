"""Search result models — Common shape for content, group and profile hits.

Each entity adapter maps its native record into a ``SearchResult``. The
``metadata`` dict is type-specific, but always carries two canonical keys
used by the merge/sort stage:

- ``created_at`` — creation time as epoch milliseconds (int)
- ``popularity`` — the entity's own popularity scalar (votes, members, rating)
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from hubsearch.models.query import EntityType


class SearchResult(BaseModel):
    """A single ranked hit returned to the caller."""

    id: str = Field(description="Record identifier in its store")
    type: EntityType = Field(description="Entity type the record belongs to")
    title: str = Field(description="Display title (post title, community name, display name)")
    description: str = Field(default="", description="Short description or excerpt")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Type-specific metadata")
    relevance_score: int = Field(ge=0, description="Textual relevance score (0 is never returned)")

    @property
    def created_at(self) -> int:
        return int(self.metadata.get("created_at") or 0)

    @property
    def popularity(self) -> float:
        return self.metadata.get("popularity") or 0


class CandidateWindow(BaseModel):
    """Output of one adapter for one query.

    ``last_record_id`` is the id of the last record in the fetched window,
    before scoring, so that a cursor can resume after it even if that record
    did not match.
    """

    entity_type: EntityType
    results: list[SearchResult] = Field(default_factory=list)
    fetched: int = Field(default=0, description="Number of records in the fetched window")
    last_record_id: str | None = None


class SearchPage(BaseModel):
    """Merged, sorted results plus continuation state."""

    results: list[SearchResult] = Field(default_factory=list)
    next_cursor: str | None = Field(default=None, description="Cursor for the next page, if any window was full")
    failed_sources: list[EntityType] = Field(default_factory=list, description="Entity types whose adapter failed")
