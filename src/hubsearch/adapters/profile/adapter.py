"""Profile adapter — Searches member and mentor profiles.

Profiles are scored on ``display_name`` + ``bio`` + the space-joined
``skills`` list; popularity is the mentor rating.
"""

from __future__ import annotations

from typing import Any

from hubsearch.adapters.base.adapter import EntitySearchAdapter
from hubsearch.models.query import EntityType
from hubsearch.models.result import SearchResult


class ProfileSearchAdapter(EntitySearchAdapter):
    """Search adapter for user profiles."""

    entity_type = EntityType.PROFILE
    popularity_field = "rating"
    title_field = "display_name"

    def searchable_text(self, record: dict[str, Any]) -> list[str | None]:
        skills = record.get("skills") or []
        return [record.get("display_name"), record.get("bio"), " ".join(str(s) for s in skills)]

    def map_to_result(self, record: dict[str, Any], relevance_score: int) -> SearchResult:
        return SearchResult(
            id=str(record["id"]),
            type=self.entity_type,
            title=record.get("display_name") or "Anonymous",
            description=record.get("bio") or "",
            metadata={
                "role": record.get("role"),
                "skills": list(record.get("skills") or []),
                "mentee_count": record.get("mentee_count") or 0,
                "rating": record.get("rating") or 0,
                "avatar_url": record.get("avatar_url"),
                "created_at": self.created_at(record),
                "popularity": self.popularity(record),
            },
            relevance_score=relevance_score,
        )
