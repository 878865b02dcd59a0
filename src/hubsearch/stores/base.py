"""Base record store — Query contract the entity adapters rely on.

A store holds one collection of records (posts, communities or users) and
must support:
  1. Equality and range constraints on top-level fields
  2. A bounded fetch, optionally ordered by a single field
  3. Resuming a fetch after a given record id (cursor pagination)

Records are plain dicts owned by the store; every record carries an ``id``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal

from pydantic import BaseModel, Field

from hubsearch.models.health import AdapterHealth

Operator = Literal["==", ">=", "<="]


class StoreConstraint(BaseModel):
    """A single store-side filter, e.g. ``upvotes >= 5``."""

    field: str = Field(description="Record field name")
    op: Operator = Field(default="==", description="Comparison operator")
    value: Any = Field(description="Value to compare against")

    def matches(self, record: dict[str, Any]) -> bool:
        actual = record.get(self.field)
        if self.op == "==":
            return actual == self.value
        if actual is None:
            return False
        try:
            if self.op == ">=":
                return actual >= self.value
            return actual <= self.value
        except TypeError:
            return False


class OrderBy(BaseModel):
    """Store-native ordering on one field."""

    field: str
    descending: bool = True


class RecordStore(ABC):
    """Abstract persistence collaborator for one record collection."""

    @property
    @abstractmethod
    def collection(self) -> str:
        """Name of the collection this store serves."""

    async def initialize(self) -> None:  # noqa: B027
        """Open connections. Optional."""

    async def shutdown(self) -> None:  # noqa: B027
        """Release connections. Optional."""

    @abstractmethod
    async def query(
        self,
        constraints: list[StoreConstraint],
        order_by: OrderBy | None = None,
        limit: int = 20,
        start_after: str | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch at most ``limit`` records matching every constraint.

        Args:
            constraints: Store-side constraints, all of which must hold.
            order_by: Optional ordering; unordered fetches use the store's
                natural order.
            limit: Maximum number of records to return.
            start_after: Record id after which to resume, in the same order.

        Returns:
            Raw record dicts.
        """

    async def sample(self, limit: int, constraints: list[StoreConstraint] | None = None) -> list[dict[str, Any]]:
        """Fetch a small unordered window, used for suggestions."""
        return await self.query(constraints or [], limit=limit)

    @abstractmethod
    async def health_check(self) -> AdapterHealth:
        """Report the store's health."""
