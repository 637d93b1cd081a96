"""
Lexicon Stream FastAPI application.

Entry point for the API server. Serves the last built stream document and the
static presentation assets.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from backend.config import Settings, settings
from backend.models.stream import HealthResponse
from backend.routes import stream as stream_routes
from backend.services.stream_store import StreamStore

logger = logging.getLogger(__name__)


def create_app(config: Settings | None = None) -> FastAPI:
    """
    Build the application for a configuration.

    The stream store is created here and shared through app.state; routes
    never read settings directly.
    """
    config = config or settings

    app = FastAPI(
        title="Lexicon Stream",
        docs_url=None,
        redoc_url=None,
    )
    app.state.stream_store = StreamStore(config.STREAM_FILE, config.SNAPSHOT_DIR)

    app.include_router(stream_routes.router)

    @app.get("/health")
    async def health() -> HealthResponse:
        """Health check endpoint for uptime monitoring."""
        return HealthResponse(status="ok")

    # Serve frontend after all API routes
    if config.STATIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=str(config.STATIC_DIR), html=True), name="static")
    else:
        logger.warning("Static directory %s not found; serving API only", config.STATIC_DIR)

    return app


app = create_app()
