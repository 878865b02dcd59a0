"""Suggestion engine — Cheap, best-effort autocomplete.

For each targeted entity type, a small structural sample (at most 10
records) is fetched and the titles containing the partial term are
returned. This is not an exhaustive match: titles outside the sample are
never suggested.

Suggestions never raise. A failing source contributes nothing, and any
unexpected error yields an empty list.
"""

from __future__ import annotations

import asyncio
import logging

from hubsearch.adapters.base.registry import AdapterRegistry
from hubsearch.models.query import EntityType, SearchType

logger = logging.getLogger(__name__)

MAX_SAMPLE_WINDOW = 10


class SuggestionEngine:
    """Produces deduplicated title suggestions for a partial term.

    Args:
        registry: Registry holding the active entity adapters.
        sample_window: Records sampled per entity type (capped at 10).
        max_suggestions: Maximum number of suggestions returned.
        min_length: Minimum partial-term length before sampling.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        sample_window: int = MAX_SAMPLE_WINDOW,
        max_suggestions: int = 10,
        min_length: int = 2,
    ) -> None:
        self.registry = registry
        self.sample_window = min(sample_window, MAX_SAMPLE_WINDOW)
        self.max_suggestions = max_suggestions
        self.min_length = min_length

    async def suggest(self, partial_term: str, type: EntityType | SearchType | None = None) -> list[str]:
        """Return up to ``max_suggestions`` titles containing ``partial_term``.

        Args:
            partial_term: What the user has typed so far.
            type: Restrict to one entity type; None or ``all`` samples every type.

        Returns:
            Deduplicated suggestions in source order (content, group, profile).
        """
        term = (partial_term or "").strip()
        if len(term) < self.min_length:
            return []

        try:
            return await self._suggest(term.lower(), _entity_types(type))
        except Exception:
            logger.warning("Suggestion lookup failed for '%s'", term, exc_info=True)
            return []

    async def _suggest(self, needle: str, entity_types: list[EntityType]) -> list[str]:
        adapters = self.registry.get_adapters(entity_types)
        samples = await asyncio.gather(
            *(adapter.sample_titles(self.sample_window) for adapter in adapters),
            return_exceptions=True,
        )

        suggestions: dict[str, None] = {}
        for adapter, titles in zip(adapters, samples, strict=True):
            if isinstance(titles, BaseException):
                logger.warning("Suggestion source '%s' failed: %s", adapter.name, titles)
                continue
            for title in titles:
                if needle in title.lower():
                    suggestions.setdefault(title, None)

        return list(suggestions)[: self.max_suggestions]


def _entity_types(type: EntityType | SearchType | None) -> list[EntityType]:
    if type is None:
        return list(EntityType)
    if isinstance(type, EntityType):
        return [type]
    return SearchType(type).entity_types
