"""Cache Manager — Redis- or memory-backed key-value store.

Backs the recent-search store, the search history sink and the search
result cache. Values must be JSON-serializable; the memory backend stores
the decoded value and honors TTLs with a monotonic clock.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from hubsearch.config.settings import CacheSettings

logger = logging.getLogger(__name__)

# Minimum seconds between sweeps of expired memory entries.
MEMORY_SWEEP_INTERVAL = 30.0


class CacheManager:
    """Unified cache interface over Redis or an in-process dict.

    Cache errors are logged and treated as misses; the cache is never on
    the failure path of a search.

    Attributes:
        settings: Cache configuration.
    """

    def __init__(self, settings: CacheSettings | None = None) -> None:
        self.settings = settings or CacheSettings()
        self._client: Any = None
        self._memory_cache: dict[str, tuple[Any, float | None]] = {}
        self._next_sweep = 0.0

    def key(self, *parts: str) -> str:
        """Build a namespaced cache key."""
        return ":".join([self.settings.key_prefix, *parts])

    @property
    def uses_redis(self) -> bool:
        return self.settings.backend == "redis" and self._client is not None

    async def initialize(self) -> None:
        """Initialize the cache backend."""
        if self.settings.backend == "redis":
            import redis.asyncio as aioredis

            try:
                self._client = aioredis.from_url(
                    self.settings.redis_url,
                    decode_responses=True,
                )
                await self._client.ping()
                logger.info("Connected to Redis cache at %s", self.settings.redis_url)
            except Exception:
                logger.warning("Failed to connect to Redis, falling back to memory cache", exc_info=True)
                self._client = None
                self.settings = self.settings.model_copy(update={"backend": "memory"})
        else:
            logger.info("Using in-memory cache backend")

    async def shutdown(self) -> None:
        """Close cache connections."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, key: str) -> Any | None:
        """Retrieve a value from cache.

        Args:
            key: Cache key.

        Returns:
            Cached value or None if not found or expired.
        """
        try:
            if self.uses_redis:
                value = await self._client.get(key)
                return json.loads(value) if value else None

            entry = self._memory_cache.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and time.monotonic() >= expires_at:
                del self._memory_cache[key]
                return None
            return value
        except Exception:
            logger.debug("Cache get failed for key: %s", key, exc_info=True)
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a value in cache.

        Args:
            key: Cache key.
            value: JSON-serializable value.
            ttl: Time-to-live in seconds (None = no expiry).
        """
        try:
            if self.uses_redis:
                serialized = json.dumps(value, default=str)
                if ttl:
                    await self._client.setex(key, ttl, serialized)
                else:
                    await self._client.set(key, serialized)
            else:
                now = time.monotonic()
                if now >= self._next_sweep:
                    self._sweep_expired(now)
                expires_at = now + ttl if ttl else None
                self._memory_cache[key] = (value, expires_at)
        except Exception:
            logger.debug("Cache set failed for key: %s", key, exc_info=True)

    def _sweep_expired(self, now: float) -> None:
        """Drop every expired memory entry, not only the ones read again."""
        expired = [
            k for k, (_, expires_at) in self._memory_cache.items() if expires_at is not None and now >= expires_at
        ]
        for k in expired:
            del self._memory_cache[k]
        self._next_sweep = now + MEMORY_SWEEP_INTERVAL
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))

    async def delete(self, key: str) -> None:
        """Delete a value from cache."""
        try:
            if self.uses_redis:
                await self._client.delete(key)
            else:
                self._memory_cache.pop(key, None)
        except Exception:
            logger.debug("Cache delete failed for key: %s", key, exc_info=True)

    async def clear(self) -> None:
        """Clear every key under this cache's prefix."""
        try:
            if self.uses_redis:
                async for key in self._client.scan_iter(match=f"{self.settings.key_prefix}:*"):
                    await self._client.delete(key)
            else:
                self._memory_cache.clear()
        except Exception:
            logger.debug("Cache clear failed", exc_info=True)
