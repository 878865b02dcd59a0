"""Data models shared by the engine, adapters and HTTP service."""

from hubsearch.models.query import DateRange, EntityType, SearchFilters, SearchQuery, SearchType, SortBy
from hubsearch.models.result import CandidateWindow, SearchPage, SearchResult

__all__ = [
    "CandidateWindow",
    "DateRange",
    "EntityType",
    "SearchFilters",
    "SearchPage",
    "SearchQuery",
    "SearchResult",
    "SearchType",
    "SortBy",
]
