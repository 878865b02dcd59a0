"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from fastapi import Depends, Header

from hubsearch.cache.recent import RecentQueryStore
from hubsearch.core.engine import HubSearchEngine

# Global engine instance (set during application lifespan)
_engine: HubSearchEngine | None = None


def set_engine(engine: HubSearchEngine | None) -> None:
    """Set the global engine instance (called during app lifespan)."""
    global _engine
    _engine = engine


def get_engine() -> HubSearchEngine:
    """Get the global search engine instance.

    Raises:
        RuntimeError: If the engine is not initialized.
    """
    if _engine is None:
        raise RuntimeError("HubSearch engine not initialized. Is the server running?")
    return _engine


def get_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    """Caller identity forwarded by the platform gateway, if any."""
    return x_user_id.strip() or None if x_user_id else None


def get_recent_store(
    user_id: str | None = Depends(get_user_id),
    engine: HubSearchEngine = Depends(get_engine),
) -> RecentQueryStore:
    """Recent-search store namespaced by the caller."""
    return engine.recent_searches(user_id)
