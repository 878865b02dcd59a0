"""Base entity adapter — Common search pipeline for one record type.

Every entity type (content, group, profile) is served by an adapter that
knows its store, its searchable fields and how to map a record into the
common ``SearchResult`` shape. The pipeline itself is shared:

  1. Build store constraints from the filters (FilterEngine)
  2. Issue one bounded fetch of ``page_size`` records, ordered by the
     entity's own timestamp/popularity field for newest/popular sorts
  3. Score each record's concatenated searchable text (RelevanceScorer)
  4. Drop zero-score records and apply post-fetch filters
  5. Map survivors to ``SearchResult``

The fetch window is bounded *before* scoring, so recall depends on the
store's structural order: relevant records outside the window are missed.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from hubsearch.adapters.base.exceptions import SourceUnavailableError
from hubsearch.core.filters import FilterEngine
from hubsearch.core.scorer import RelevanceScorer
from hubsearch.core.timestamps import to_epoch_millis
from hubsearch.models.health import AdapterHealth
from hubsearch.models.query import EntityType, SearchFilters, SortBy
from hubsearch.models.result import CandidateWindow, SearchResult
from hubsearch.stores.base import OrderBy, RecordStore

logger = logging.getLogger(__name__)

__all__ = ["AdapterHealth", "EntitySearchAdapter"]


class EntitySearchAdapter(ABC):
    """Abstract base class for per-entity search adapters.

    Subclasses declare:
      - entity_type: the EntityType they serve
      - timestamp_field / popularity_field: store-native ordering fields
      - title_field: the field used for suggestions
      - searchable_text(): the text scored against the term
      - map_to_result(): the record → SearchResult mapping

    Args:
        store: The record store holding this entity's collection.
        filter_engine: Filter splitter (a default one is created if omitted).
        scorer: Relevance scorer (a default one is created if omitted).
    """

    entity_type: EntityType
    timestamp_field: str = "created_at"
    popularity_field: str | None = None
    title_field: str = "title"

    def __init__(
        self,
        store: RecordStore,
        filter_engine: FilterEngine | None = None,
        scorer: RelevanceScorer | None = None,
    ) -> None:
        self.store = store
        self.filter_engine = filter_engine or FilterEngine()
        self.scorer = scorer or RelevanceScorer()

    @property
    def name(self) -> str:
        return self.entity_type.value

    async def initialize(self) -> None:
        await self.store.initialize()

    async def shutdown(self) -> None:
        await self.store.shutdown()

    @abstractmethod
    def searchable_text(self, record: dict[str, Any]) -> list[str | None]:
        """Text fields scored against the search term, in concatenation order."""

    @abstractmethod
    def map_to_result(self, record: dict[str, Any], relevance_score: int) -> SearchResult:
        """Map a raw record to a SearchResult."""

    def popularity(self, record: dict[str, Any]) -> float:
        if self.popularity_field is None:
            return 0
        return record.get(self.popularity_field) or 0

    def created_at(self, record: dict[str, Any]) -> int:
        return to_epoch_millis(record.get(self.timestamp_field))

    def order_for(self, sort_by: SortBy) -> OrderBy | None:
        """Store-native ordering for the requested sort, or None for unordered."""
        if sort_by is SortBy.NEWEST:
            return OrderBy(field=self.timestamp_field)
        if sort_by is SortBy.POPULAR and self.popularity_field:
            return OrderBy(field=self.popularity_field)
        return None

    async def fetch_window(
        self,
        term: str,
        filters: SearchFilters | None,
        sort_by: SortBy,
        page_size: int,
        cursor: str | None = None,
    ) -> CandidateWindow:
        """Fetch, score, filter and map one bounded candidate window.

        Args:
            term: The trimmed search term.
            filters: Optional search filters.
            sort_by: Requested ordering (drives store-side ordering).
            page_size: Size of the candidate window.
            cursor: Record id to resume after, if continuing a previous page.

        Returns:
            The CandidateWindow for this entity type.

        Raises:
            SourceUnavailableError: If the store cannot be queried.
        """
        plan = self.filter_engine.plan(self.entity_type, filters)

        try:
            records = await self.store.query(
                plan.store_constraints,
                order_by=self.order_for(sort_by),
                limit=page_size,
                start_after=cursor,
            )
        except SourceUnavailableError:
            raise
        except Exception as e:
            raise SourceUnavailableError(f"{self.name} store query failed: {e}") from e

        keyed = [r for r in records if r.get("id") is not None]
        if len(keyed) < len(records):
            logger.warning(
                "Adapter '%s': skipped %d records without an id",
                self.name,
                len(records) - len(keyed),
            )

        results: list[SearchResult] = []
        for record in keyed:
            relevance = self.scorer.score_fields(term, *self.searchable_text(record))
            if relevance <= 0:
                continue
            if not plan.accepts(record):
                continue
            results.append(self.map_to_result(record, relevance))

        logger.debug(
            "Adapter '%s': %d of %d fetched records matched '%s'",
            self.name,
            len(results),
            len(records),
            term,
        )

        return CandidateWindow(
            entity_type=self.entity_type,
            results=results,
            fetched=len(records),
            last_record_id=str(keyed[-1]["id"]) if keyed else None,
        )

    async def find_candidates(
        self,
        term: str,
        filters: SearchFilters | None,
        sort_by: SortBy,
        page_size: int,
        cursor: str | None = None,
    ) -> list[SearchResult]:
        """Scored, filtered results for one entity type (no cursor state)."""
        window = await self.fetch_window(term, filters, sort_by, page_size, cursor)
        return window.results

    async def sample_titles(self, limit: int) -> list[str]:
        """Titles from a small structural sample of the store, for suggestions."""
        records = await self.store.sample(limit, self.filter_engine.default_constraints(self.entity_type))
        return [str(r[self.title_field]) for r in records if r.get(self.title_field)]

    async def health_check(self) -> AdapterHealth:
        return await self.store.health_check()
