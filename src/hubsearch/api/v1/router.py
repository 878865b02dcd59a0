"""API v1 Router — Search, suggestion, recent-search and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from hubsearch.api.v1.endpoints.health import router as health_router
from hubsearch.api.v1.endpoints.recent import router as recent_router
from hubsearch.api.v1.endpoints.search import router as search_router
from hubsearch.api.v1.endpoints.suggest import router as suggest_router

router = APIRouter(tags=["v1"])
router.include_router(search_router)
router.include_router(suggest_router)
router.include_router(recent_router)
router.include_router(health_router)
