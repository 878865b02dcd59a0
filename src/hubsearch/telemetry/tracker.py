"""Search telemetry — Fire-and-forget record of executed searches.

Sinks are awaited only from background tasks scheduled by the engine; they
are never on the critical path of a search.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

from hubsearch.cache.manager import CacheManager

logger = logging.getLogger(__name__)


class TelemetrySink(ABC):
    """Receives one event per completed search."""

    @abstractmethod
    async def track(self, term: str, result_count: int, user_id: str | None = None) -> None:
        """Record that ``term`` was searched and produced ``result_count`` results."""


class LoggingTelemetrySink(TelemetrySink):
    """Emits one structured log line per search."""

    async def track(self, term: str, result_count: int, user_id: str | None = None) -> None:
        logger.info(
            "Search tracked: '%s' (%d results)",
            term,
            result_count,
            extra={"user_id": user_id, "result_count": result_count},
        )


class HistoryTelemetrySink(TelemetrySink):
    """Appends searches to a capped per-user history in the cache.

    Args:
        cache: Key-value backend.
        limit: Number of entries kept per user, newest first.
    """

    def __init__(self, cache: CacheManager, limit: int = 50) -> None:
        self._cache = cache
        self.limit = limit

    def _key(self, user_id: str | None) -> str:
        return self._cache.key("history", user_id or "anonymous")

    async def track(self, term: str, result_count: int, user_id: str | None = None) -> None:
        key = self._key(user_id)
        history = await self._cache.get(key)
        if not isinstance(history, list):
            history = []
        entry = {"term": term, "result_count": result_count, "at": int(time.time() * 1000)}
        await self._cache.set(key, [entry, *history][: self.limit])

    async def history(self, user_id: str | None = None) -> list[dict]:
        value = await self._cache.get(self._key(user_id))
        return value if isinstance(value, list) else []
