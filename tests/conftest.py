"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from hubsearch.adapters import ADAPTER_CLASSES
from hubsearch.api.app import create_app
from hubsearch.api.deps import set_engine
from hubsearch.config.settings import Settings
from hubsearch.core.engine import HubSearchEngine
from hubsearch.models.query import EntityType
from hubsearch.stores.memory import InMemoryRecordStore


@pytest.fixture
def settings() -> Settings:
    """Test settings: memory backends, no result cache, no per-adapter timeout."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        search={"adapter_timeout_seconds": None, "debounce_ms": 0},
        cache={"result_ttl_seconds": 0},
    )


# ── Record fixtures ──


@pytest.fixture
def post_records() -> list[dict[str, Any]]:
    return [
        {
            "id": "p1",
            "title": "React hooks",
            "body": "",
            "author_id": "u1",
            "scope_id": "react-community",
            "upvotes": 10,
            "downvotes": 0,
            "view_count": 120,
            "tags": ["react", "javascript"],
            "created_at": "2024-03-01T10:00:00Z",
        },
        {
            "id": "p2",
            "title": "JavaScript tutorial for beginners",
            "body": "Variables, functions and the event loop.",
            "author_id": "u2",
            "scope_id": "js-community",
            "upvotes": 3,
            "tags": ["javascript"],
            "created_at": 1714560000000,
        },
        {
            "id": "p3",
            "title": "Testing React components",
            "body": "Hooks, mocks and snapshot tests with jest.",
            "author_id": "u1",
            "scope_id": "react-community",
            "upvotes": 7,
            "tags": ["react", "testing"],
            "created_at": {"seconds": 1704067200, "nanoseconds": 0},
        },
        {
            "id": "p4",
            "title": "Gardening tips",
            "body": "Nothing to do with code.",
            "author_id": "u3",
            "scope_id": "garden",
            "upvotes": 50,
            "tags": ["outdoors"],
            "created_at": "2024-06-01T00:00:00Z",
        },
    ]


@pytest.fixture
def group_records() -> list[dict[str, Any]]:
    return [
        {
            "id": "c1",
            "name": "React Community",
            "description": "Everything React: hooks, state and rendering.",
            "category": "engineering",
            "tags": ["react"],
            "member_count": 120,
            "visibility": "public",
            "creator_id": "u1",
            "created_at": "2023-11-20T08:30:00Z",
        },
        {
            "id": "c2",
            "name": "Secret React Club",
            "description": "Private react circle.",
            "tags": ["react"],
            "member_count": 5,
            "visibility": "private",
            "creator_id": "u2",
            "created_at": "2023-12-01T00:00:00Z",
        },
        {
            "id": "c3",
            "name": "Python Mentors",
            "description": "Weekly code reviews.",
            "tags": ["python"],
            "member_count": 45,
            "visibility": "public",
            "creator_id": "u2",
            "created_at": "2024-01-15T00:00:00Z",
        },
    ]


@pytest.fixture
def profile_records() -> list[dict[str, Any]]:
    return [
        {
            "id": "u1",
            "display_name": "Ada React",
            "bio": "Frontend mentor.",
            "skills": ["react", "typescript"],
            "role": "mentor",
            "mentee_count": 12,
            "rating": 4.8,
            "created_at": "2023-05-02T12:00:00Z",
        },
        {
            "id": "u2",
            "display_name": "Grace",
            "bio": "Backend engineer who loves python.",
            "skills": ["python", "postgres"],
            "role": "mentor",
            "mentee_count": 3,
            "rating": 4.1,
            "created_at": "2022-01-01T00:00:00Z",
        },
    ]


@pytest.fixture
def stores(
    post_records: list[dict[str, Any]],
    group_records: list[dict[str, Any]],
    profile_records: list[dict[str, Any]],
) -> dict[EntityType, InMemoryRecordStore]:
    return {
        EntityType.CONTENT: InMemoryRecordStore("posts", post_records),
        EntityType.GROUP: InMemoryRecordStore("communities", group_records),
        EntityType.PROFILE: InMemoryRecordStore("users", profile_records),
    }


@pytest.fixture
async def engine(settings: Settings, stores: dict[EntityType, InMemoryRecordStore]) -> AsyncIterator[HubSearchEngine]:
    """Initialized engine over the in-memory fixture stores."""
    engine = HubSearchEngine(settings, telemetry=[])
    await engine.initialize(stores=stores)
    yield engine
    await engine.shutdown()


# ── API fixtures ──


@pytest.fixture
def api_engine(settings: Settings, stores: dict[EntityType, InMemoryRecordStore]) -> HubSearchEngine:
    """Engine wired to the fixture stores without running async initialization."""
    engine = HubSearchEngine(settings, telemetry=[])
    for entity_type, store in stores.items():
        engine.adapter_registry.add(ADAPTER_CLASSES[entity_type](store=store))
    return engine


@pytest.fixture
def client(settings: Settings, api_engine: HubSearchEngine) -> Iterator[TestClient]:
    """Test client with the engine injected; the app lifespan is not run."""
    app = create_app(settings)
    set_engine(api_engine)
    yield TestClient(app)
    set_engine(None)
