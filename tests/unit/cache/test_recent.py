"""Tests for the recent-search store."""

from __future__ import annotations

import pytest

from hubsearch.cache.manager import CacheManager
from hubsearch.cache.recent import RecentQueryStore


@pytest.fixture
def cache() -> CacheManager:
    return CacheManager()


@pytest.fixture
def recent(cache: CacheManager) -> RecentQueryStore:
    return RecentQueryStore(cache, namespace="u1")


class TestRecentQueryStore:
    async def test_most_recent_first(self, recent: RecentQueryStore) -> None:
        for term in ("a1", "b2", "c3"):
            await recent.save(term)
        assert await recent.list() == ["c3", "b2", "a1"]

    async def test_capped_at_limit(self, recent: RecentQueryStore) -> None:
        for i in range(7):
            await recent.save(f"term {i}")
        assert await recent.list() == ["term 6", "term 5", "term 4", "term 3", "term 2"]

    async def test_repeat_moves_to_front(self, recent: RecentQueryStore) -> None:
        for term in ("react", "python", "react"):
            await recent.save(term)
        assert await recent.list() == ["react", "python"]

    async def test_terms_trimmed_and_blanks_ignored(self, recent: RecentQueryStore) -> None:
        await recent.save("  react  ")
        await recent.save("   ")
        await recent.save("")
        assert await recent.list() == ["react"]

    async def test_clear(self, recent: RecentQueryStore) -> None:
        await recent.save("react")
        await recent.clear()
        assert await recent.list() == []

    async def test_namespaces_isolated(self, cache: CacheManager, recent: RecentQueryStore) -> None:
        await recent.save("react")
        assert await RecentQueryStore(cache, namespace="u2").list() == []

    async def test_malformed_entry_discarded(self, cache: CacheManager, recent: RecentQueryStore) -> None:
        await cache.set(cache.key("recent", "u1"), "not a list")
        assert await recent.list() == []
