"""Query coordinator — Concurrent fan-out, merge and sort.

The coordinator turns one ``SearchQuery`` into one ranked list:

  1. Blank term → ``[]`` without touching any store
  2. Resolve the targeted entity types (``all`` ⇒ content, group, profile)
  3. Run every targeted adapter concurrently and collect one
     ``AdapterOutcome`` per adapter (success or failure)
  4. Log failures and treat them as empty; raise ``AggregationError`` only
     if every adapter failed
  5. Merge in adapter order and sort (stable)

Sorting happens after the join, so the output does not depend on the order
in which adapters complete.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from hubsearch.adapters.base.adapter import EntitySearchAdapter
from hubsearch.adapters.base.exceptions import SourceUnavailableError
from hubsearch.adapters.base.registry import AdapterRegistry
from hubsearch.core.cursor import decode_cursor, encode_cursor
from hubsearch.core.exceptions import AggregationError
from hubsearch.core.sorting import merge_results
from hubsearch.models.query import EntityType, SearchQuery
from hubsearch.models.result import CandidateWindow, SearchPage, SearchResult

logger = logging.getLogger(__name__)


@dataclass
class AdapterOutcome:
    """Result of one adapter call: either a window or the error it raised."""

    entity_type: EntityType
    window: CandidateWindow | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class QueryCoordinator:
    """Fans a query out to the entity adapters and merges their results.

    Args:
        registry: Registry holding the active entity adapters.
        adapter_timeout: Optional per-adapter timeout in seconds; a timed-out
            adapter counts as failed.
    """

    def __init__(self, registry: AdapterRegistry, adapter_timeout: float | None = None) -> None:
        self.registry = registry
        self.adapter_timeout = adapter_timeout

    async def search(self, query: SearchQuery) -> list[SearchResult]:
        """Execute a search and return the merged, sorted results.

        Raises:
            AggregationError: If every targeted adapter failed.
        """
        page = await self.search_page(query)
        return page.results

    async def search_page(self, query: SearchQuery) -> SearchPage:
        """Execute a search and return results plus continuation state.

        Raises:
            AggregationError: If every targeted adapter failed.
        """
        if query.is_blank:
            return SearchPage()

        start_time = time.monotonic()
        positions = decode_cursor(query.cursor)
        entity_types = query.type.entity_types
        if query.cursor:
            # Types missing from the cursor were exhausted on the previous page.
            entity_types = [t for t in entity_types if t in positions]

        adapters = self.registry.get_adapters(entity_types)
        if not adapters:
            logger.warning("No adapters available for search type '%s'", query.type.value)
            return SearchPage()

        outcomes = await asyncio.gather(
            *(self._run_adapter(adapter, query, positions.get(adapter.entity_type)) for adapter in adapters)
        )

        failures = {o.entity_type: o.error for o in outcomes if not o.ok}
        for entity_type, error in failures.items():
            logger.warning("Search source '%s' failed: %s", entity_type.value, error)

        if len(failures) == len(outcomes):
            logger.error("All %d search sources failed for '%s'", len(outcomes), query.search_term)
            raise AggregationError(failures)  # type: ignore[arg-type]

        windows = [o.window for o in outcomes if o.window is not None]
        results = merge_results((w.results for w in windows), query.sort_by)

        next_positions = {
            w.entity_type: w.last_record_id
            for w in windows
            if w.last_record_id is not None and w.fetched >= query.page_size
        }

        logger.info(
            "Search '%s' (%s, sort=%s): %d results from %d/%d sources in %d ms",
            query.search_term,
            query.type.value,
            query.sort_by.value,
            len(results),
            len(windows),
            len(outcomes),
            int((time.monotonic() - start_time) * 1000),
        )

        return SearchPage(
            results=results,
            next_cursor=encode_cursor(next_positions),
            failed_sources=list(failures),
        )

    async def _run_adapter(
        self,
        adapter: EntitySearchAdapter,
        query: SearchQuery,
        cursor: str | None,
    ) -> AdapterOutcome:
        call = adapter.fetch_window(
            query.search_term,
            query.filters,
            query.sort_by,
            query.page_size,
            cursor,
        )
        try:
            if self.adapter_timeout:
                window = await asyncio.wait_for(call, timeout=self.adapter_timeout)
            else:
                window = await call
        except TimeoutError:
            error = SourceUnavailableError(f"{adapter.name} timed out after {self.adapter_timeout}s")
            return AdapterOutcome(entity_type=adapter.entity_type, error=error)
        except Exception as e:
            return AdapterOutcome(entity_type=adapter.entity_type, error=e)
        return AdapterOutcome(entity_type=adapter.entity_type, window=window)
