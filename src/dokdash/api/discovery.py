# dokdash/api/discovery.py
"""
Root-level health endpoint.
"""
from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict:
    aggregator = getattr(request.app.state, "aggregator", None)
    return {
        "status": "healthy",
        "upstream": "configured" if aggregator and aggregator.configured else "not configured",
    }
