"""In-memory record store — Collections held in process.

Used for tests and local development. Collections can be seeded from a
YAML or JSON fixture file of the form::

    content:
      - {id: p1, title: "React hooks", body: "...", upvotes: 10, ...}
    group:
      - {id: c1, name: "Frontend Guild", visibility: public, ...}
    profile:
      - {id: u1, display_name: "Ada", bio: "...", skills: [python], ...}
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from hubsearch.core.timestamps import to_epoch_millis
from hubsearch.models.health import AdapterHealth
from hubsearch.stores.base import OrderBy, RecordStore, StoreConstraint

logger = logging.getLogger(__name__)


def _sort_key(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return to_epoch_millis(value)


class InMemoryRecordStore(RecordStore):
    """Record store backed by a Python list.

    The natural (unordered) order is insertion order. Ordered fetches are
    stable, so records with equal sort keys keep their insertion order.

    Args:
        collection: Collection name (e.g. ``"posts"``).
        records: Initial records; each must carry an ``id``.
    """

    def __init__(self, collection: str, records: Iterable[dict[str, Any]] | None = None) -> None:
        self._collection = collection
        self._records: list[dict[str, Any]] = []
        self.query_count = 0
        for record in records or []:
            self.add(record)

    @property
    def collection(self) -> str:
        return self._collection

    def add(self, record: dict[str, Any]) -> None:
        if "id" not in record:
            raise ValueError(f"Record in '{self._collection}' is missing an 'id'")
        self._records.append(dict(record))

    def __len__(self) -> int:
        return len(self._records)

    async def query(
        self,
        constraints: list[StoreConstraint],
        order_by: OrderBy | None = None,
        limit: int = 20,
        start_after: str | None = None,
    ) -> list[dict[str, Any]]:
        self.query_count += 1

        matching = [r for r in self._records if all(c.matches(r) for c in constraints)]
        if order_by is not None:
            matching.sort(
                key=lambda r: _sort_key(r.get(order_by.field)),
                reverse=order_by.descending,
            )

        if start_after is not None:
            ids = [str(r["id"]) for r in matching]
            if start_after in ids:
                matching = matching[ids.index(start_after) + 1 :]
            else:
                logger.debug("Cursor id %s not found in '%s'", start_after, self._collection)
                matching = []

        return [dict(r) for r in matching[:limit]]

    async def health_check(self) -> AdapterHealth:
        return AdapterHealth(status="healthy", message=f"{len(self._records)} records in memory")


def load_seed_file(path: str | Path) -> dict[str, list[dict[str, Any]]]:
    """Load seed records keyed by entity type from a YAML or JSON file.

    Args:
        path: Path to the seed file (``.json``, ``.yaml`` or ``.yml``).

    Returns:
        Mapping of entity type name to record list.
    """
    seed_path = Path(path)
    if not seed_path.exists():
        raise FileNotFoundError(f"Seed file not found: {seed_path}")

    with open(seed_path, encoding="utf-8") as f:
        if seed_path.suffix == ".json":
            data = json.load(f)
        else:
            import yaml  # type: ignore[import-untyped]

            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in seed file {seed_path}: {e}") from e

    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"Seed file {seed_path} must contain a mapping of entity type to records")
    return {str(k): list(v or []) for k, v in data.items()}
