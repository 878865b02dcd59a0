"""HubSearch Engine — Public surface of the search subsystem.

The engine wires the pieces together and owns their lifecycle:

  - AdapterRegistry: one entity adapter per record type, each on its store
  - QueryCoordinator: concurrent fan-out, merge and sort
  - SuggestionEngine: sampled autocomplete
  - ResultCache: short-lived memory of complete results
  - Telemetry sinks: fire-and-forget search tracking

Exposed operations:
  - ``search(query)`` → ranked results (may raise ``AggregationError``)
  - ``search_page(query)`` → ranked results plus a continuation cursor
  - ``suggest(partial_term, type)`` → title suggestions (never raises)
  - ``track_search(user_id, term, result_count)`` → schedules telemetry
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from hubsearch.adapters import ADAPTER_CLASSES
from hubsearch.adapters.base.registry import AdapterRegistry
from hubsearch.cache.manager import CacheManager
from hubsearch.cache.recent import DEFAULT_NAMESPACE, RecentQueryStore
from hubsearch.cache.results import ResultCache
from hubsearch.core.coordinator import QueryCoordinator
from hubsearch.core.suggestions import SuggestionEngine
from hubsearch.models.query import EntityType, SearchQuery, SearchType
from hubsearch.models.result import SearchPage, SearchResult
from hubsearch.stores.factory import build_stores
from hubsearch.telemetry.tracker import HistoryTelemetrySink, LoggingTelemetrySink, TelemetrySink

if TYPE_CHECKING:
    from hubsearch.config.settings import Settings
    from hubsearch.stores.base import RecordStore

logger = logging.getLogger(__name__)


class HubSearchEngine:
    """Search engine facade.

    Attributes:
        settings: Application configuration.
        adapter_registry: Registry of entity adapters.
        cache: Key-value backend shared by the result cache, recent searches
            and search history.
        coordinator: Multi-source query coordinator.
        suggestions: Autocomplete engine.
    """

    def __init__(
        self,
        settings: Settings,
        cache: CacheManager | None = None,
        telemetry: list[TelemetrySink] | None = None,
    ) -> None:
        self.settings = settings
        self.adapter_registry = AdapterRegistry()
        self.cache = cache or CacheManager(settings.cache)
        self.result_cache = ResultCache(self.cache, ttl=settings.cache.result_ttl_seconds)
        self.telemetry: list[TelemetrySink] = (
            telemetry
            if telemetry is not None
            else [LoggingTelemetrySink(), HistoryTelemetrySink(self.cache, limit=settings.cache.history_limit)]
        )
        self.coordinator = QueryCoordinator(
            self.adapter_registry,
            adapter_timeout=settings.search.adapter_timeout_seconds,
        )
        self.suggestions = SuggestionEngine(
            self.adapter_registry,
            sample_window=settings.search.suggestion_window,
            max_suggestions=settings.search.max_suggestions,
            min_length=settings.search.min_suggestion_length,
        )
        self._background: set[asyncio.Task[None]] = set()

    async def initialize(self, stores: dict[EntityType, RecordStore] | None = None) -> None:
        """Initialize the cache and one adapter per enabled entity type.

        Args:
            stores: Record stores per entity type. Built from
                ``settings.stores`` when omitted.
        """
        await self.cache.initialize()

        if stores is None:
            stores = build_stores(self.settings.stores)

        for entity_type in self.settings.search.enabled_types:
            store = stores.get(entity_type)
            if store is None:
                logger.warning("No store for '%s', adapter disabled", entity_type.value)
                continue
            self.adapter_registry.register(entity_type, ADAPTER_CLASSES[entity_type])
            try:
                await self.adapter_registry.initialize_adapter(entity_type, store=store)
            except Exception:
                logger.warning("Failed to initialise adapter '%s'", entity_type.value, exc_info=True)

        logger.info("HubSearch engine initialized (adapters: %s)", self.adapter_registry.active_adapters)

    async def shutdown(self) -> None:
        """Drain telemetry tasks and shut down adapters and cache."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        await self.adapter_registry.shutdown_all()
        await self.cache.shutdown()
        logger.info("HubSearch engine shut down")

    # ──────────────────────────────────────────────────────────────────────
    # Search
    # ──────────────────────────────────────────────────────────────────────

    async def search(self, query: SearchQuery, *, user_id: str | None = None) -> list[SearchResult]:
        """Run a search and return the merged, ranked results.

        Args:
            query: The search query.
            user_id: When given, the search is tracked for this user.

        Returns:
            Ranked results; ``[]`` for a blank term.

        Raises:
            AggregationError: If every targeted source failed.
        """
        if query.is_blank:
            return []

        results = await self.result_cache.get(query)
        if results is None:
            page = await self.coordinator.search_page(query)
            results = page.results
            if page.failed_sources:
                logger.debug("Not caching partial results for '%s'", query.search_term)
            else:
                await self.result_cache.put(query, results)
        else:
            logger.debug("Result cache hit for '%s'", query.search_term)

        if user_id:
            self.track_search(user_id, query.search_term, len(results))
        return results

    async def search_page(self, query: SearchQuery) -> SearchPage:
        """Run a search and return results with a continuation cursor.

        Raises:
            AggregationError: If every targeted source failed.
        """
        return await self.coordinator.search_page(query)

    async def suggest(self, partial_term: str, type: EntityType | SearchType | None = None) -> list[str]:
        """Autocomplete suggestions for ``partial_term``. Never raises."""
        return await self.suggestions.suggest(partial_term, type)

    def recent_searches(self, namespace: str | None = None) -> RecentQueryStore:
        """Recent-search store for one user (or the anonymous namespace)."""
        return RecentQueryStore(
            self.cache,
            namespace=namespace or DEFAULT_NAMESPACE,
            limit=self.settings.cache.recent_limit,
        )

    # ──────────────────────────────────────────────────────────────────────
    # Telemetry
    # ──────────────────────────────────────────────────────────────────────

    def track_search(self, user_id: str | None, term: str, result_count: int) -> None:
        """Schedule search tracking in the background and return immediately.

        Failures are logged and never reach the caller.
        """
        if not self.settings.observability.track_searches or not self.telemetry:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, search not tracked: '%s'", term)
            return

        for sink in self.telemetry:
            task = loop.create_task(self._track(sink, user_id, term, result_count))
            self._background.add(task)
            task.add_done_callback(self._background.discard)

    @staticmethod
    async def _track(sink: TelemetrySink, user_id: str | None, term: str, result_count: int) -> None:
        try:
            await sink.track(term, result_count, user_id=user_id)
        except Exception:
            logger.warning("Search tracking failed in %s", type(sink).__name__, exc_info=True)
