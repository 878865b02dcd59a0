"""Health status model shared by stores, adapters and the health endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AdapterHealth(BaseModel):
    """Health status of a search adapter or its backing store."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")
