"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from hubsearch import __version__
from hubsearch.api.deps import set_engine
from hubsearch.api.v1.router import router as v1_router
from hubsearch.config.settings import Settings
from hubsearch.core.engine import HubSearchEngine
from hubsearch.observability.logging import bind_request_context, clear_request_context, setup_logging

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = Path("hubsearch-config.yaml")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads ``hubsearch-config.yaml``
            when present, otherwise the environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        if _DEFAULT_CONFIG.exists():
            logger.info("Loading configuration from %s", _DEFAULT_CONFIG)
            settings = Settings.from_yaml(_DEFAULT_CONFIG)
        else:
            settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.observability)
        logger.info("Starting HubSearch v%s", __version__)

        engine = HubSearchEngine(settings)
        await engine.initialize()
        set_engine(engine)

        app.state.settings = settings
        app.state.engine = engine

        logger.info("HubSearch is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down HubSearch...")
        await engine.shutdown()
        set_engine(None)
        logger.info("HubSearch shutdown complete")

    app = FastAPI(
        title="HubSearch",
        description=(
            "Search and ranking service for the community platform — multi-type "
            "search over posts, communities and profiles, plus autocomplete."
        ),
        version=__version__,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        bind_request_context(request_id=request_id, user_id=request.headers.get("x-user-id"))
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Request-Id"] = request_id
        return response

    app.include_router(v1_router, prefix="/v1")

    return app
