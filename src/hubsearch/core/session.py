"""Search session — Caller-side search and suggestion state.

UI/controller code keeps one ``SearchSession`` per user view. Requests can
overlap (the user keeps typing, or re-submits), and responses may arrive in
any order. Every request therefore takes a generation number from a
monotonic counter when it is issued, and its response is applied only if
that number is still the latest one issued for the same kind of request.
Stale responses are dropped.

Suggestions are additionally debounced: a request first waits
``debounce_ms`` and is abandoned without any I/O if a newer keystroke
arrived in the meantime.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from hubsearch.cache.recent import RecentQueryStore
from hubsearch.core.engine import HubSearchEngine
from hubsearch.core.exceptions import SEARCH_FAILED_MESSAGE, AggregationError
from hubsearch.models.query import SearchFilters, SearchQuery, SearchType, SortBy
from hubsearch.models.result import SearchResult

logger = logging.getLogger(__name__)


class GenerationCounter:
    """Monotonic request counter used to detect stale responses."""

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def next(self) -> int:
        """Issue a new generation; every earlier one becomes stale."""
        self._latest += 1
        return self._latest

    def is_current(self, generation: int) -> bool:
        return generation == self._latest


@dataclass
class SearchState:
    """Snapshot of what the view currently shows."""

    results: list[SearchResult] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    current_query: str = ""
    search_type: SearchType = SearchType.ALL
    sort_by: SortBy = SortBy.RELEVANCE
    loading: bool = False
    error: str | None = None
    total_results: int = 0


class SearchSession:
    """Generation-guarded search state for one caller.

    Args:
        engine: The search engine.
        recent: Optional recent-search store; searches are recorded there.
        debounce_ms: Delay before a suggestion request is sent. Defaults to
            the engine's ``search.debounce_ms`` setting.
        user_id: Identifier used for search tracking.
    """

    def __init__(
        self,
        engine: HubSearchEngine,
        recent: RecentQueryStore | None = None,
        debounce_ms: int | None = None,
        user_id: str | None = None,
    ) -> None:
        self.engine = engine
        self.recent = recent
        self.user_id = user_id
        self.debounce_ms = engine.settings.search.debounce_ms if debounce_ms is None else debounce_ms
        self.state = SearchState()
        self._search_generations = GenerationCounter()
        self._suggestion_generations = GenerationCounter()

    # ── Search ───────────────────────────────────────────────────────────

    async def perform_search(
        self,
        term: str,
        filters: SearchFilters | None = None,
        user_id: str | None = None,
    ) -> list[SearchResult] | None:
        """Run a search and update state if no newer search was issued.

        Args:
            term: Raw search term as typed.
            filters: Optional search filters.
            user_id: Caller to track the search for; defaults to the
                session's ``user_id``.

        Returns:
            The results applied to state, or None if the term was blank, the
            search failed, or the response was stale.
        """
        term = term.strip()
        if not term:
            self.clear()
            return None

        generation = self._search_generations.next()
        self.state.loading = True
        self.state.error = None
        self.state.current_query = term

        query = SearchQuery(
            search_term=term,
            type=self.state.search_type,
            filters=filters,
            sort_by=self.state.sort_by,
        )

        try:
            results = await self.engine.search(query, user_id=user_id or self.user_id)
        except AggregationError:
            if self._search_generations.is_current(generation):
                self.state.error = SEARCH_FAILED_MESSAGE
                self.state.results = []
                self.state.total_results = 0
            return None
        finally:
            if self._search_generations.is_current(generation):
                self.state.loading = False

        if not self._search_generations.is_current(generation):
            logger.debug("Discarding stale search response for '%s' (generation %d)", term, generation)
            return None

        self.state.results = results
        self.state.total_results = len(results)

        if self.recent is not None:
            await self.recent.save(term)
        return results

    # ── Suggestions ──────────────────────────────────────────────────────

    async def request_suggestions(self, partial_term: str) -> list[str] | None:
        """Debounced, generation-guarded suggestion lookup.

        Returns:
            The suggestions applied to state, or None if the request was
            superseded before or after the lookup.
        """
        generation = self._suggestion_generations.next()

        if self.debounce_ms:
            await asyncio.sleep(self.debounce_ms / 1000)
            if not self._suggestion_generations.is_current(generation):
                return None

        type_ = None if self.state.search_type is SearchType.ALL else self.state.search_type
        suggestions = await self.engine.suggest(partial_term, type_)

        if not self._suggestion_generations.is_current(generation):
            logger.debug("Discarding stale suggestions for '%s' (generation %d)", partial_term, generation)
            return None

        self.state.suggestions = suggestions
        return suggestions

    # ── State setters ────────────────────────────────────────────────────

    def set_current_query(self, term: str) -> None:
        self.state.current_query = term

    def set_search_type(self, search_type: SearchType) -> None:
        self.state.search_type = SearchType(search_type)

    def set_sort_by(self, sort_by: SortBy) -> None:
        self.state.sort_by = SortBy(sort_by)

    def clear(self) -> None:
        """Reset results and suggestions; in-flight responses become stale."""
        self._search_generations.next()
        self._suggestion_generations.next()
        self.state.results = []
        self.state.suggestions = []
        self.state.current_query = ""
        self.state.loading = False
        self.state.error = None
        self.state.total_results = 0

    def clear_error(self) -> None:
        self.state.error = None
