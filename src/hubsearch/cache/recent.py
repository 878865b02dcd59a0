"""Recent searches — Per-user list of the last few search terms.

Backed by the injected ``CacheManager`` instead of module-level state, so
callers (and tests) choose the key-value backend.
"""

from __future__ import annotations

import logging

from hubsearch.cache.manager import CacheManager

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "anonymous"


class RecentQueryStore:
    """Most-recent-first, deduplicated, capped list of search terms.

    Args:
        cache: Key-value backend.
        namespace: Owner of the list (typically a user id).
        limit: Maximum number of terms kept (default 5).
    """

    def __init__(self, cache: CacheManager, namespace: str = DEFAULT_NAMESPACE, limit: int = 5) -> None:
        self._cache = cache
        self._key = cache.key("recent", namespace)
        self.limit = limit

    async def save(self, term: str) -> None:
        """Record ``term`` as the most recent search. Blank terms are ignored."""
        term = term.strip()
        if not term:
            return
        current = await self.list()
        updated = [term, *(t for t in current if t != term)][: self.limit]
        await self._cache.set(self._key, updated)

    async def list(self) -> list[str]:
        value = await self._cache.get(self._key)
        if not isinstance(value, list):
            if value is not None:
                logger.warning("Discarding malformed recent-search entry at %s", self._key)
            return []
        return [str(t) for t in value][: self.limit]

    async def clear(self) -> None:
        await self._cache.delete(self._key)
