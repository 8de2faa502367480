"""FastAPI application factory.

Settings
--------
The factory resolves :class:`~gateway.config.Settings` once and stores it on
``app.state.settings``; every forwarding endpoint reads the backend location
from there and nowhere else.

Routers
-------
    /api      forwarding endpoints built from the route table
    /health   liveness probe
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gateway import __version__
from gateway.config import Settings, settings as default_settings
from gateway.log import configure_logging, get_logger

from gateway.api.routers import forward as forward_router
from gateway.api.routers import health as health_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, then log the resolved backend on startup and a
    matching line on shutdown.

    Importing this module does not touch logging configuration.
    """
    resolved = app.state.settings
    configure_logging(resolved.log_level, resolved.log_format)
    logger.info("gateway_started", backend=resolved.api_base_url)
    try:
        yield
    finally:
        logger.info("gateway_stopped")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    resolved = app_settings or default_settings

    app = FastAPI(
        title="Worklog Gateway",
        description=(
            "Forwards worklog front-end calls (login, leave, shifts, "
            "attendance, users, work locations) to the worklog backend API "
            "with bearer-token authorization."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = resolved

    # Answers the browser's CORS preflight for every route.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=resolved.cors_origins,
        allow_methods=["*"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(forward_router.router, prefix="/api", tags=["forward"])
    app.include_router(health_router.router, prefix="/health", tags=["health"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn gateway.api.app:app --reload
app = create_app()
