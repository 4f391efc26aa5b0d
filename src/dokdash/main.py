# dokdash/main.py
"""
Dashboard application factory.

Creates a FastAPI application serving the aggregated Dokploy payload under
``/api`` and the single-page shell everywhere else.
"""
from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from dokdash import __version__
from dokdash.api.config import router as config_router
from dokdash.api.discovery import router as discovery_router
from dokdash.api.shell import STATIC_DIR
from dokdash.api.shell import router as shell_router
from dokdash.core.aggregator import ConfigAggregator
from dokdash.core.config import Settings, settings as default_settings
from dokdash.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build and wire the dashboard application.

    ``transport`` replaces the network layer of upstream calls (tests).
    """
    settings = settings or default_settings
    configure_logging(settings.log_level, json_format=settings.log_json)
    logger.info("Creating dashboard application (env=%s)", settings.app_env)

    aggregator = ConfigAggregator(settings, transport=transport)
    if not aggregator.configured:
        logger.warning("DOKPLOY_BASE_URL is not set; /api/config will report an error")

    app = FastAPI(
        title="Dokdash",
        version=__version__,
        description="Dokploy projects, environments and service domains",
    )
    app.state.settings = settings
    app.state.aggregator = aggregator

    app.include_router(discovery_router)
    app.include_router(config_router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    # Catch-all; must stay last
    app.include_router(shell_router)

    return app
