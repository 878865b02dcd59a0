"""Tests for the search and suggestion endpoints."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from hubsearch.core.engine import HubSearchEngine
from hubsearch.core.exceptions import SEARCH_FAILED_MESSAGE
from hubsearch.models.query import EntityType
from hubsearch.stores.memory import InMemoryRecordStore


def _break(store: InMemoryRecordStore) -> None:
    store.query = AsyncMock(side_effect=RuntimeError("store offline"))  # type: ignore[method-assign]


# ══════════════════════════════════════════════════════════════════════════════
# POST /v1/search
# ══════════════════════════════════════════════════════════════════════════════


class TestSearchEndpoint:
    def test_search_all(self, client: TestClient) -> None:
        response = client.post("/v1/search", json={"search_term": "react"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert data["query"] == "react"
        assert [r["id"] for r in data["results"]] == ["p1", "c1", "p3", "u1"]
        assert data["total"] == 4
        assert data["failed_sources"] == []
        assert data["request_id"].startswith("req_")

    def test_result_shape(self, client: TestClient) -> None:
        data = client.post("/v1/search", json={"search_term": "react hooks", "type": "content"}).json()
        first = data["results"][0]
        assert first["type"] == "content"
        assert first["title"] == "React hooks"
        assert first["relevance_score"] == 100
        assert first["metadata"]["upvotes"] == 10
        assert first["metadata"]["created_at"] == 1709287200000

    def test_filters_and_sort(self, client: TestClient) -> None:
        body: dict[str, Any] = {
            "search_term": "react",
            "type": "content",
            "sort_by": "popular",
            "filters": {"scope_id": "react-community", "min_popularity": 5},
        }
        data = client.post("/v1/search", json=body).json()
        assert [r["metadata"]["upvotes"] for r in data["results"]] == [10, 7]

    def test_blank_term(self, client: TestClient, stores: dict[EntityType, InMemoryRecordStore]) -> None:
        data = client.post("/v1/search", json={"search_term": "   "}).json()
        assert data["status"] == "no_results"
        assert data["results"] == []
        assert all(store.query_count == 0 for store in stores.values())

    def test_partial_failure(self, client: TestClient, stores: dict[EntityType, InMemoryRecordStore]) -> None:
        _break(stores[EntityType.PROFILE])
        data = client.post("/v1/search", json={"search_term": "react"}).json()
        assert [r["id"] for r in data["results"]] == ["p1", "c1", "p3"]
        assert data["failed_sources"] == ["profile"]

    def test_total_failure(self, client: TestClient, stores: dict[EntityType, InMemoryRecordStore]) -> None:
        for store in stores.values():
            _break(store)
        response = client.post("/v1/search", json={"search_term": "react"})
        assert response.status_code == 503
        assert response.json()["detail"] == SEARCH_FAILED_MESSAGE

    def test_invalid_page_size(self, client: TestClient) -> None:
        response = client.post("/v1/search", json={"search_term": "react", "page_size": 0})
        assert response.status_code == 422

    def test_invalid_type(self, client: TestClient) -> None:
        response = client.post("/v1/search", json={"search_term": "react", "type": "events"})
        assert response.status_code == 422

    def test_reversed_date_range_with_mixed_timezones(self, client: TestClient) -> None:
        date_range = {"start": "2024-12-31T00:00:00", "end": "2024-01-01T00:00:00Z"}
        response = client.post("/v1/search", json={"search_term": "react", "filters": {"date_range": date_range}})
        assert response.status_code == 422

    def test_invalid_cursor(self, client: TestClient) -> None:
        response = client.post("/v1/search", json={"search_term": "react", "cursor": "bm90IGpzb24"})
        assert response.status_code == 400

    def test_pagination(self, client: TestClient) -> None:
        first = client.post("/v1/search", json={"search_term": "e", "type": "content", "page_size": 2}).json()
        assert [r["id"] for r in first["results"]] == ["p1", "p2"]
        assert first["next_cursor"]

        second = client.post(
            "/v1/search",
            json={"search_term": "e", "type": "content", "page_size": 2, "cursor": first["next_cursor"]},
        ).json()
        assert [r["id"] for r in second["results"]] == ["p3", "p4"]

    def test_tracks_identified_caller(self, client: TestClient, api_engine: HubSearchEngine) -> None:
        calls: list[tuple] = []
        api_engine.track_search = lambda *args: calls.append(args)  # type: ignore[method-assign]
        client.post("/v1/search", json={"search_term": "react"}, headers={"X-User-Id": "u42"})
        client.post("/v1/search", json={"search_term": "react"})
        assert calls == [("u42", "react", 4)]

    def test_request_id_header(self, client: TestClient) -> None:
        response = client.post("/v1/search", json={"search_term": "react"}, headers={"X-Request-Id": "abc123"})
        assert response.headers["X-Request-Id"] == "abc123"


# ══════════════════════════════════════════════════════════════════════════════
# GET /v1/suggest
# ══════════════════════════════════════════════════════════════════════════════


class TestSuggestEndpoint:
    def test_suggest(self, client: TestClient) -> None:
        data = client.get("/v1/suggest", params={"q": "re"}).json()
        assert data == {
            "query": "re",
            "suggestions": ["React hooks", "Testing React components", "React Community", "Ada React"],
        }

    def test_suggest_by_type(self, client: TestClient) -> None:
        data = client.get("/v1/suggest", params={"q": "react", "type": "group"}).json()
        assert data["suggestions"] == ["React Community"]

    def test_short_term(self, client: TestClient) -> None:
        assert client.get("/v1/suggest", params={"q": "r"}).json()["suggestions"] == []

    def test_backend_failure_is_empty(self, client: TestClient, stores: dict[EntityType, InMemoryRecordStore]) -> None:
        for store in stores.values():
            _break(store)
        response = client.get("/v1/suggest", params={"q": "react"})
        assert response.status_code == 200
        assert response.json()["suggestions"] == []
