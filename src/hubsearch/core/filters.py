"""Filter engine — Splits search filters into store-side and app-side parts.

Store-side constraints are sent with the bounded fetch (equality on scope and
author, ``>=`` on the popularity field, default visibility rules). The rest
cannot be expressed by the store query contract and is applied to the
fetched window afterwards:

  - ``tags``: the record's tag set must intersect the requested tags
  - ``date_range``: the record's creation time must fall in [start, end]

Not every filter is meaningful for every entity type. Inapplicable filters
(e.g. ``scope_id`` on a profile search) are ignored, never rejected.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from hubsearch.core.timestamps import to_epoch_millis
from hubsearch.models.query import EntityType, SearchFilters
from hubsearch.stores.base import StoreConstraint

PostFilter = Callable[[dict[str, Any]], bool]


@dataclass(frozen=True)
class FilterSchema:
    """Where each filter lands for one entity type.

    A ``None`` field name means the filter does not apply to that type.
    """

    scope_field: str | None = None
    author_field: str | None = None
    popularity_field: str | None = None
    tags_field: str | None = None
    created_field: str = "created_at"
    defaults: tuple[tuple[str, Any], ...] = ()


SCHEMAS: dict[EntityType, FilterSchema] = {
    EntityType.CONTENT: FilterSchema(
        scope_field="scope_id",
        author_field="author_id",
        popularity_field="upvotes",
        tags_field="tags",
    ),
    EntityType.GROUP: FilterSchema(
        author_field="creator_id",
        popularity_field="member_count",
        tags_field="tags",
        defaults=(("visibility", "public"),),
    ),
    EntityType.PROFILE: FilterSchema(
        popularity_field="rating",
        tags_field="skills",
    ),
}


@dataclass
class FilterPlan:
    """Result of splitting filters for one entity type."""

    store_constraints: list[StoreConstraint] = field(default_factory=list)
    post_filters: list[PostFilter] = field(default_factory=list)

    def accepts(self, record: dict[str, Any]) -> bool:
        return all(f(record) for f in self.post_filters)


class FilterEngine:
    """Builds per-entity ``FilterPlan`` objects from ``SearchFilters``."""

    def __init__(self, schemas: dict[EntityType, FilterSchema] | None = None) -> None:
        self._schemas = schemas or SCHEMAS

    def schema(self, entity_type: EntityType) -> FilterSchema:
        return self._schemas[entity_type]

    def default_constraints(self, entity_type: EntityType) -> list[StoreConstraint]:
        """Constraints that always apply to the entity type (e.g. public groups)."""
        return [StoreConstraint(field=k, op="==", value=v) for k, v in self.schema(entity_type).defaults]

    def plan(self, entity_type: EntityType, filters: SearchFilters | None) -> FilterPlan:
        """Split ``filters`` into store constraints and post-fetch filters.

        Args:
            entity_type: The entity type being searched.
            filters: User filters, or None for no constraints.

        Returns:
            The FilterPlan for that entity type.
        """
        schema = self.schema(entity_type)
        plan = FilterPlan(store_constraints=self.default_constraints(entity_type))
        if filters is None:
            return plan

        if filters.scope_id and schema.scope_field:
            plan.store_constraints.append(StoreConstraint(field=schema.scope_field, op="==", value=filters.scope_id))

        if filters.author_id and schema.author_field:
            plan.store_constraints.append(
                StoreConstraint(field=schema.author_field, op="==", value=filters.author_id)
            )

        if filters.min_popularity is not None and schema.popularity_field:
            plan.store_constraints.append(
                StoreConstraint(field=schema.popularity_field, op=">=", value=filters.min_popularity)
            )

        if filters.tags and schema.tags_field:
            plan.post_filters.append(_tags_filter(schema.tags_field, set(filters.tags)))

        if filters.date_range is not None:
            start = to_epoch_millis(filters.date_range.start)
            end = to_epoch_millis(filters.date_range.end)
            plan.post_filters.append(_date_filter(schema.created_field, start, end))

        return plan


def _tags_filter(tags_field: str, wanted: set[str]) -> PostFilter:
    def accept(record: dict[str, Any]) -> bool:
        return not wanted.isdisjoint(record.get(tags_field) or ())

    return accept


def _date_filter(created_field: str, start: int, end: int) -> PostFilter:
    def accept(record: dict[str, Any]) -> bool:
        return start <= to_epoch_millis(record.get(created_field)) <= end

    return accept
