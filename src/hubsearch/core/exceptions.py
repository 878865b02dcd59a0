"""Engine exceptions.

Only ``AggregationError`` crosses the engine boundary; everything else is
recovered where it happens.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hubsearch.models.query import EntityType

SEARCH_FAILED_MESSAGE = "Search failed. Please try again."


class HubSearchError(Exception):
    """Base exception for the search engine."""


class ValidationError(HubSearchError):
    """Raised for a blank search term.

    Handled locally: the coordinator short-circuits to an empty result list
    instead of surfacing it.
    """


class AggregationError(HubSearchError):
    """Raised when every targeted entity source failed.

    The message is the generic user-facing one; per-source causes are kept
    on ``failures`` for logging only.
    """

    def __init__(self, failures: dict[EntityType, BaseException]) -> None:
        super().__init__(SEARCH_FAILED_MESSAGE)
        self.failures = failures
