"""HTTP record store — Document-store gateway connector.

Talks to a document-store gateway that exposes one query endpoint per
collection::

    POST /collections/{collection}/query
    {
      "where": [{"field": "visibility", "op": "==", "value": "public"}],
      "order_by": {"field": "created_at", "direction": "desc"},
      "limit": 20,
      "start_after": "doc_123"
    }

    → {"documents": [{"id": "doc_124", ...}, ...]}

Uses ``httpx`` like the rest of the service.

Usage::

    store = HttpRecordStore(base_url="http://localhost:8090", collection="posts")
    await store.initialize()
    records = await store.query([StoreConstraint(field="upvotes", op=">=", value=5)], limit=20)
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

import httpx

from hubsearch.adapters.base.exceptions import SourceUnavailableError
from hubsearch.models.health import AdapterHealth
from hubsearch.stores.base import OrderBy, RecordStore, StoreConstraint

logger = logging.getLogger(__name__)


class HttpRecordStore(RecordStore):
    """Record store reached through the document-store gateway.

    Args:
        base_url: Gateway URL, e.g. ``"http://localhost:8090"``.
        collection: Collection name (``"posts"``, ``"communities"``, ``"users"``).
        api_key: Optional bearer token.
        timeout: HTTP request timeout in seconds.
        transport: Optional ``httpx`` transport (used for testing).
    """

    def __init__(
        self,
        base_url: str,
        collection: str,
        api_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._collection = collection
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def collection(self) -> str:
        return self._collection

    async def initialize(self) -> None:
        """Create the ``httpx.AsyncClient``."""
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers=headers,
            transport=self._transport,
        )
        logger.info("HTTP store ready at %s (collection: %s)", self._base_url, self._collection)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def query(
        self,
        constraints: list[StoreConstraint],
        order_by: OrderBy | None = None,
        limit: int = 20,
        start_after: str | None = None,
    ) -> list[dict[str, Any]]:
        if not self._client:
            raise SourceUnavailableError(f"HTTP store for '{self._collection}' not initialized.")

        payload: dict[str, Any] = {
            "where": [c.model_dump(mode="json") for c in constraints],
            "limit": limit,
        }
        if order_by is not None:
            payload["order_by"] = {
                "field": order_by.field,
                "direction": "desc" if order_by.descending else "asc",
            }
        if start_after is not None:
            payload["start_after"] = start_after

        try:
            start = time.monotonic()
            resp = await self._client.post(f"/collections/{self._collection}/query", json=payload)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailableError(
                f"Store query on '{self._collection}' failed with status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise SourceUnavailableError(f"Store query on '{self._collection}' failed: {e}") from e

        documents = data.get("documents") if isinstance(data, dict) else None
        if not isinstance(documents, list):
            raise SourceUnavailableError(f"Malformed store response for '{self._collection}'")

        logger.debug(
            "Fetched %d records from '%s' in %d ms",
            len(documents),
            self._collection,
            int((time.monotonic() - start) * 1000),
        )
        return documents

    async def health_check(self) -> AdapterHealth:
        if not self._client:
            return AdapterHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get("/health")
            latency_ms = int((time.monotonic() - start) * 1000)
            resp.raise_for_status()
            return AdapterHealth(
                status="healthy",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
            )
        except httpx.HTTPError as e:
            return AdapterHealth(
                status="unhealthy",
                last_check=datetime.now(UTC).isoformat(),
                message=str(e),
            )
