"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from opendcat import __version__
from opendcat.api.deps import set_engine
from opendcat.api.v1.router import router as v1_router
from opendcat.config.settings import Settings
from opendcat.core.engine import DcatEngine
from opendcat.observability.logging import setup_logging

logger = logging.getLogger(__name__)


def load_settings(config: str | Path | None = None) -> Settings:
    """Load settings from ``config`` (or ``$OPENDCAT_CONFIG_FILE``), ``./opendcat-config.yaml``, or the environment."""
    config = config or os.environ.get("OPENDCAT_CONFIG_FILE")
    if config:
        return Settings.from_yaml(config)
    yaml_path = Path("opendcat-config.yaml")
    if yaml_path.exists():
        logger.info("Loading configuration from %s", yaml_path)
        return Settings.from_yaml(yaml_path)
    return Settings()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from YAML/environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()
    setup_logging(settings.observability)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting OpenDCAT v%s", __version__)

        engine = DcatEngine(settings)
        await engine.initialize()
        await engine.adapter_registry.configure(settings.search.adapters)
        set_engine(engine)
        app.state.settings = settings
        app.state.engine = engine

        logger.info("OpenDCAT is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down OpenDCAT...")
        await engine.shutdown()
        set_engine(None)

    app = FastAPI(
        title="OpenDCAT",
        description="Publishes metadata search results as a DCAT-US (Project Open Data v1.1) catalog.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/v1")
    return app

