"""Tests for generation-guarded search sessions."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from hubsearch.cache.manager import CacheManager
from hubsearch.cache.recent import RecentQueryStore
from hubsearch.core.engine import HubSearchEngine
from hubsearch.core.exceptions import SEARCH_FAILED_MESSAGE, AggregationError
from hubsearch.core.session import GenerationCounter, SearchSession
from hubsearch.models.query import EntityType, SearchQuery, SearchType, SortBy
from hubsearch.models.result import SearchResult

# ── Helpers ──────────────────────────────────────────────────────────────────


def _result(rid: str) -> SearchResult:
    return SearchResult(id=rid, type=EntityType.CONTENT, title=rid, relevance_score=50)


class GatedEngine:
    """Engine stand-in whose responses are released by the test, per term."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.search_calls: list[SearchQuery] = []
        self.suggest_calls: list[tuple[str, Any]] = []

    def gate(self, term: str) -> asyncio.Event:
        return self.gates.setdefault(term, asyncio.Event())

    async def search(self, query: SearchQuery, *, user_id: str | None = None) -> list[SearchResult]:
        self.search_calls.append(query)
        await self.gate(query.search_term).wait()
        return [_result(f"{query.search_term}-1")]

    async def suggest(self, partial_term: str, type: Any = None) -> list[str]:
        self.suggest_calls.append((partial_term, type))
        await self.gate(partial_term).wait()
        return [f"{partial_term} suggestion"]


async def _settle() -> None:
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.fixture
def fake_engine() -> GatedEngine:
    return GatedEngine()


@pytest.fixture
def session(fake_engine: GatedEngine) -> SearchSession:
    return SearchSession(fake_engine, debounce_ms=0)  # type: ignore[arg-type]


# ══════════════════════════════════════════════════════════════════════════════
# Generation counter
# ══════════════════════════════════════════════════════════════════════════════


class TestGenerationCounter:
    def test_only_latest_is_current(self) -> None:
        counter = GenerationCounter()
        first = counter.next()
        second = counter.next()
        assert second > first
        assert counter.is_current(second)
        assert not counter.is_current(first)
        assert counter.latest == second


# ══════════════════════════════════════════════════════════════════════════════
# Search
# ══════════════════════════════════════════════════════════════════════════════


class TestPerformSearch:
    async def test_late_response_of_older_search_is_dropped(
        self, session: SearchSession, fake_engine: GatedEngine
    ) -> None:
        task_a = asyncio.create_task(session.perform_search("rea"))
        await _settle()
        task_b = asyncio.create_task(session.perform_search("react"))
        await _settle()

        fake_engine.gate("react").set()
        assert [r.id for r in await task_b] == ["react-1"]

        fake_engine.gate("rea").set()
        assert await task_a is None

        assert [r.id for r in session.state.results] == ["react-1"]
        assert session.state.current_query == "react"
        assert session.state.loading is False

    async def test_blank_term_clears_state(self, session: SearchSession, fake_engine: GatedEngine) -> None:
        session.state.results = [_result("old")]
        assert await session.perform_search("   ") is None
        assert session.state.results == []
        assert fake_engine.search_calls == []

    async def test_uses_session_type_and_sort(self, session: SearchSession, fake_engine: GatedEngine) -> None:
        session.set_search_type(SearchType.GROUP)
        session.set_sort_by(SortBy.POPULAR)
        fake_engine.gate("python").set()
        await session.perform_search("python")
        query = fake_engine.search_calls[0]
        assert query.type is SearchType.GROUP
        assert query.sort_by is SortBy.POPULAR

    async def test_aggregation_error_sets_message(self) -> None:
        engine = AsyncMock()
        engine.search.side_effect = AggregationError({EntityType.CONTENT: RuntimeError("down")})
        session = SearchSession(engine, debounce_ms=0)
        session.state.results = [_result("old")]

        assert await session.perform_search("react") is None
        assert session.state.error == SEARCH_FAILED_MESSAGE
        assert session.state.results == []
        assert session.state.loading is False

        session.clear_error()
        assert session.state.error is None

    async def test_unexpected_error_clears_loading(self) -> None:
        engine = AsyncMock()
        engine.search.side_effect = RuntimeError("boom")
        session = SearchSession(engine, debounce_ms=0)

        with pytest.raises(RuntimeError):
            await session.perform_search("react")
        assert session.state.loading is False
        assert session.state.current_query == "react"

    async def test_stale_failure_does_not_overwrite(self, fake_engine: GatedEngine) -> None:
        failed = asyncio.Event()

        async def search(query: SearchQuery, *, user_id: str | None = None) -> list[SearchResult]:
            if query.search_term == "old":
                await failed.wait()
                raise AggregationError({})
            return [_result("new")]

        fake_engine.search = search  # type: ignore[method-assign]
        session = SearchSession(fake_engine, debounce_ms=0)  # type: ignore[arg-type]

        task_old = asyncio.create_task(session.perform_search("old"))
        await _settle()
        await session.perform_search("new")
        failed.set()
        await task_old

        assert session.state.error is None
        assert [r.id for r in session.state.results] == ["new"]

    async def test_saves_recent_search(self, fake_engine: GatedEngine) -> None:
        recent = RecentQueryStore(CacheManager())
        session = SearchSession(fake_engine, recent=recent, debounce_ms=0)  # type: ignore[arg-type]
        fake_engine.gate("react").set()
        await session.perform_search("  react ")
        assert await recent.list() == ["react"]

    async def test_user_id_forwarded_for_tracking(self) -> None:
        engine = AsyncMock()
        engine.search.return_value = []
        session = SearchSession(engine, debounce_ms=0, user_id="owner")

        await session.perform_search("react")
        assert engine.search.call_args.kwargs["user_id"] == "owner"

        await session.perform_search("react", user_id="u5")
        assert engine.search.call_args.kwargs["user_id"] == "u5"

    async def test_against_real_engine(self, engine: HubSearchEngine) -> None:
        session = SearchSession(engine)
        results = await session.perform_search("react")
        assert results is not None
        assert session.state.total_results == 4


# ══════════════════════════════════════════════════════════════════════════════
# Suggestions
# ══════════════════════════════════════════════════════════════════════════════


class TestRequestSuggestions:
    async def test_late_response_of_older_request_is_dropped(
        self, session: SearchSession, fake_engine: GatedEngine
    ) -> None:
        task_a = asyncio.create_task(session.request_suggestions("re"))
        await _settle()
        task_b = asyncio.create_task(session.request_suggestions("rea"))
        await _settle()

        fake_engine.gate("rea").set()
        assert await task_b == ["rea suggestion"]

        fake_engine.gate("re").set()
        assert await task_a is None

        assert session.state.suggestions == ["rea suggestion"]

    async def test_debounce_skips_superseded_keystrokes(self, fake_engine: GatedEngine) -> None:
        session = SearchSession(fake_engine, debounce_ms=20)  # type: ignore[arg-type]
        fake_engine.gate("rea").set()

        first, second = await asyncio.gather(
            session.request_suggestions("re"),
            session.request_suggestions("rea"),
        )

        assert first is None
        assert second == ["rea suggestion"]
        assert [call[0] for call in fake_engine.suggest_calls] == ["rea"]

    async def test_type_passed_through(self, session: SearchSession, fake_engine: GatedEngine) -> None:
        fake_engine.gate("py").set()
        await session.request_suggestions("py")
        session.set_search_type(SearchType.PROFILE)
        await session.request_suggestions("py")
        assert [call[1] for call in fake_engine.suggest_calls] == [None, SearchType.PROFILE]

    async def test_clear_invalidates_in_flight(self, session: SearchSession, fake_engine: GatedEngine) -> None:
        task = asyncio.create_task(session.request_suggestions("re"))
        await _settle()
        session.clear()
        fake_engine.gate("re").set()
        assert await task is None
        assert session.state.suggestions == []
