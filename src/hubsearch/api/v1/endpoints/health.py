"""Health check endpoints — System and adapter health monitoring."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from hubsearch import __version__
from hubsearch.api.deps import get_engine
from hubsearch.core.engine import HubSearchEngine
from hubsearch.models.health import AdapterHealth

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="HubSearch server version")
    service: str = Field(description="Service name ('hubsearch')")
    store_backend: str = Field(description="Configured record store backend")
    active_adapters: list[str] = Field(description="Entity types with an active adapter")


class AdapterHealthResponse(BaseModel):
    """Per-adapter health, keyed by entity type."""

    adapters: dict[str, AdapterHealth] = Field(description="Map of entity type to its store health")


@router.get("/health", response_model=HealthResponse, summary="System Health Check")
async def health_check(engine: HubSearchEngine = Depends(get_engine)) -> HealthResponse:
    active = engine.adapter_registry.active_adapters
    return HealthResponse(
        status="healthy" if active else "degraded",
        version=__version__,
        service="hubsearch",
        store_backend=engine.settings.stores.backend,
        active_adapters=active,
    )


@router.get("/health/adapters", response_model=AdapterHealthResponse, summary="Adapter Health Check")
async def adapter_health(engine: HubSearchEngine = Depends(get_engine)) -> AdapterHealthResponse:
    return AdapterHealthResponse(adapters=await engine.adapter_registry.health_check_all())
