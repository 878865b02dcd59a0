"""Tests for the group (communities) adapter."""

from __future__ import annotations

from typing import Any

import pytest

from hubsearch.adapters.group.adapter import GroupSearchAdapter
from hubsearch.models.query import EntityType, SearchFilters, SortBy
from hubsearch.stores.memory import InMemoryRecordStore


@pytest.fixture
def adapter(stores: dict[EntityType, InMemoryRecordStore]) -> GroupSearchAdapter:
    return GroupSearchAdapter(store=stores[EntityType.GROUP])


class TestGroupAdapter:
    def test_map_to_result(self, adapter: GroupSearchAdapter, group_records: list[dict[str, Any]]) -> None:
        result = adapter.map_to_result(group_records[0], 55)
        assert result.title == "React Community"
        assert result.metadata["members"] == 120
        assert result.metadata["visibility"] == "public"
        assert result.metadata["category"] == "engineering"
        assert result.popularity == 120

    async def test_only_public_groups(self, adapter: GroupSearchAdapter) -> None:
        window = await adapter.fetch_window("react", None, SortBy.RELEVANCE, 20)
        assert [r.id for r in window.results] == ["c1"]
        # The private group is excluded before the window is filled.
        assert window.fetched == 2

    async def test_author_maps_to_creator(self, adapter: GroupSearchAdapter) -> None:
        window = await adapter.fetch_window("e", SearchFilters(author_id="u2"), SortBy.RELEVANCE, 20)
        assert [r.id for r in window.results] == ["c3"]

    async def test_min_popularity_on_members(self, adapter: GroupSearchAdapter) -> None:
        window = await adapter.fetch_window("e", SearchFilters(min_popularity=100), SortBy.RELEVANCE, 20)
        assert [r.id for r in window.results] == ["c1"]

    async def test_scope_ignored(self, adapter: GroupSearchAdapter) -> None:
        window = await adapter.fetch_window("python", SearchFilters(scope_id="anything"), SortBy.RELEVANCE, 20)
        assert [r.id for r in window.results] == ["c3"]

    async def test_sample_titles_skip_private(self, adapter: GroupSearchAdapter) -> None:
        assert await adapter.sample_titles(10) == ["React Community", "Python Mentors"]
