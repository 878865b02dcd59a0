"""Result cache — Short-lived memory of complete search results.

Entries are keyed by a hash of the canonical query JSON, so two queries
differing only in field order or surrounding whitespace share an entry.
"""

from __future__ import annotations

import hashlib
import json
import logging

from pydantic import ValidationError as PydanticValidationError

from hubsearch.cache.manager import CacheManager
from hubsearch.models.query import SearchQuery
from hubsearch.models.result import SearchResult

logger = logging.getLogger(__name__)


class ResultCache:
    """Caches ``search()`` output per query for ``ttl`` seconds.

    Args:
        cache: Key-value backend.
        ttl: Time-to-live in seconds; 0 disables the cache.
    """

    def __init__(self, cache: CacheManager, ttl: int = 60) -> None:
        self._cache = cache
        self.ttl = ttl

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def key_for(self, query: SearchQuery) -> str:
        data = query.model_dump(mode="json")
        if data.get("filters") and data["filters"].get("tags"):
            data["filters"]["tags"] = sorted(data["filters"]["tags"])
        canonical = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
        digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
        return self._cache.key("results", digest)

    async def get(self, query: SearchQuery) -> list[SearchResult] | None:
        if not self.enabled:
            return None
        value = await self._cache.get(self.key_for(query))
        if value is None:
            return None
        try:
            return [SearchResult.model_validate(item) for item in value]
        except (PydanticValidationError, TypeError):
            logger.warning("Discarding malformed cached results for '%s'", query.search_term)
            return None

    async def put(self, query: SearchQuery, results: list[SearchResult]) -> None:
        if not self.enabled:
            return
        await self._cache.set(
            self.key_for(query),
            [r.model_dump(mode="json") for r in results],
            ttl=self.ttl,
        )
