"""Content adapter — Searches community posts.

Posts are scored on ``title`` + ``body``; popularity is the upvote count.
The description is the first 150 characters of the body.
"""

from __future__ import annotations

from typing import Any

from hubsearch.adapters.base.adapter import EntitySearchAdapter
from hubsearch.models.query import EntityType
from hubsearch.models.result import SearchResult

DESCRIPTION_LENGTH = 150


class ContentSearchAdapter(EntitySearchAdapter):
    """Search adapter for posts."""

    entity_type = EntityType.CONTENT
    popularity_field = "upvotes"
    title_field = "title"

    def searchable_text(self, record: dict[str, Any]) -> list[str | None]:
        return [record.get("title"), record.get("body")]

    def map_to_result(self, record: dict[str, Any], relevance_score: int) -> SearchResult:
        body = record.get("body") or ""
        return SearchResult(
            id=str(record["id"]),
            type=self.entity_type,
            title=record.get("title") or "Untitled",
            description=body[:DESCRIPTION_LENGTH],
            metadata={
                "author_id": record.get("author_id"),
                "scope_id": record.get("scope_id"),
                "upvotes": record.get("upvotes") or 0,
                "downvotes": record.get("downvotes") or 0,
                "views": record.get("view_count") or 0,
                "tags": list(record.get("tags") or []),
                "created_at": self.created_at(record),
                "popularity": self.popularity(record),
            },
            relevance_score=relevance_score,
        )
