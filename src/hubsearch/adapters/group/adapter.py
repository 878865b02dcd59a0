"""Group adapter — Searches communities.

Only public communities are searchable; the visibility constraint is applied
store-side on every fetch. Communities are scored on ``name`` +
``description``; popularity is the member count.
"""

from __future__ import annotations

from typing import Any

from hubsearch.adapters.base.adapter import EntitySearchAdapter
from hubsearch.models.query import EntityType
from hubsearch.models.result import SearchResult


class GroupSearchAdapter(EntitySearchAdapter):
    """Search adapter for communities."""

    entity_type = EntityType.GROUP
    popularity_field = "member_count"
    title_field = "name"

    def searchable_text(self, record: dict[str, Any]) -> list[str | None]:
        return [record.get("name"), record.get("description")]

    def map_to_result(self, record: dict[str, Any], relevance_score: int) -> SearchResult:
        return SearchResult(
            id=str(record["id"]),
            type=self.entity_type,
            title=record.get("name") or "Untitled",
            description=record.get("description") or "",
            metadata={
                "category": record.get("category"),
                "tags": list(record.get("tags") or []),
                "members": record.get("member_count") or 0,
                "visibility": record.get("visibility"),
                "creator_id": record.get("creator_id"),
                "created_at": self.created_at(record),
                "popularity": self.popularity(record),
            },
            relevance_score=relevance_score,
        )
