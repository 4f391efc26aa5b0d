# dokdash/api/shell.py
"""
Single-page application shell.

Static assets live under ``/static``; any other unmatched path renders
the HTML shell so client-side navigation keeps working on reload.
"""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from dokdash import __version__
from dokdash.dashboard.pins import PIN_STORAGE_KEY

PACKAGE_DIR = Path(__file__).resolve().parent.parent
STATIC_DIR = PACKAGE_DIR / "static"
TEMPLATES_DIR = PACKAGE_DIR / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.get("/{full_path:path}", response_class=HTMLResponse, include_in_schema=False)
async def index(request: Request, full_path: str) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"version": __version__, "pin_storage_key": PIN_STORAGE_KEY},
    )
