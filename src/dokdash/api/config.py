# dokdash/api/config.py
"""
Aggregated Dokploy data endpoints.

Every failure (configuration, upstream status, transport, validation) is
answered with ``500 {"error": message}``; nothing escapes to the server.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from dokdash.contracts.entry import EntriesResponse
from dokdash.core.aggregator import ConfigAggregator
from dokdash.core.errors import DashboardError
from dokdash.core.projection import flatten_projects

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

NO_STORE = {"Cache-Control": "no-store"}


def _get_aggregator(request: Request) -> ConfigAggregator:
    aggregator = getattr(request.app.state, "aggregator", None)
    if aggregator is None:
        raise DashboardError("Config aggregator not initialized")
    return aggregator


def _error_response(exc: Exception) -> JSONResponse:
    if isinstance(exc, DashboardError):
        logger.warning("Failed to build Dokploy config payload: %s", exc)
    else:
        logger.exception("Failed to build Dokploy config payload")
    message = str(exc) or "Unknown error"
    return JSONResponse({"error": message}, status_code=500, headers=NO_STORE)


@router.get("/config")
async def get_config(request: Request) -> JSONResponse:
    """Projects plus OpenAPI metadata, validated and merged."""
    try:
        payload = await _get_aggregator(request).fetch_config()
    except Exception as exc:
        return _error_response(exc)
    return JSONResponse(payload.to_wire(), headers=NO_STORE)


@router.get("/entries")
async def get_entries(request: Request) -> JSONResponse:
    """The same data flattened into sorted ``ResourceEntry`` records."""
    try:
        payload = await _get_aggregator(request).fetch_config()
        body = EntriesResponse(
            meta=payload.meta,
            entries=flatten_projects(payload.projects),
        )
    except Exception as exc:
        return _error_response(exc)
    return JSONResponse(
        body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=NO_STORE,
    )
