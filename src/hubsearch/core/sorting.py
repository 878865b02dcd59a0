"""Sort & merge — Stable orderings over the merged result list.

All orderings are descending on a single numeric key and rely on Python's
stable sort, so entries with equal keys keep the order in which their
adapters emitted them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from hubsearch.models.query import SortBy
from hubsearch.models.result import SearchResult

_SORT_KEYS: dict[SortBy, Callable[[SearchResult], float]] = {
    SortBy.RELEVANCE: lambda r: r.relevance_score,
    SortBy.NEWEST: lambda r: r.created_at,
    SortBy.POPULAR: lambda r: r.popularity,
}


def sort_results(results: Iterable[SearchResult], sort_by: SortBy = SortBy.RELEVANCE) -> list[SearchResult]:
    """Return a new list sorted by ``sort_by``, descending and stable."""
    return sorted(results, key=_SORT_KEYS[sort_by], reverse=True)


def merge_results(partials: Iterable[list[SearchResult]], sort_by: SortBy = SortBy.RELEVANCE) -> list[SearchResult]:
    """Concatenate per-adapter lists in adapter order, then sort."""
    merged: list[SearchResult] = []
    for partial in partials:
        merged.extend(partial)
    return sort_results(merged, sort_by)
