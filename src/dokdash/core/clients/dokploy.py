# dokdash/core/clients/dokploy.py
"""
Thin async client for the Dokploy HTTP API.

Contract::

    GET {base}/settings.getOpenApiDocument
    GET {base}/project.all

Both calls send ``Accept: application/json`` and, when configured,
``x-api-key``. Status handling is left to the caller; only transport
failures are translated here.
"""
from __future__ import annotations

import logging
import re

import httpx

from dokdash.core.errors import NetworkError

logger = logging.getLogger(__name__)

OPENAPI_PATH = "/settings.getOpenApiDocument"
PROJECTS_PATH = "/project.all"

_API_SEGMENT = re.compile(r"/api(?:/|$)")


def normalize_base_url(raw: str | None) -> str | None:
    """Normalize a configured Dokploy URL to its API root.

    Whitespace is trimmed, a single trailing slash removed and ``/api``
    appended unless an ``/api`` segment is already present. Blank input
    yields ``None``.
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return None

    normalized = trimmed[:-1] if trimmed.endswith("/") else trimmed
    if not _API_SEGMENT.search(normalized):
        normalized = f"{normalized}/api"
    return normalized


class DokployClient:
    """HTTP client for one Dokploy instance."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base = base_url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base

    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["x-api-key"] = self._api_key
        return headers

    def session(self) -> httpx.AsyncClient:
        """A fresh client bound to this instance's timeout and transport."""
        kwargs: dict = {"timeout": self._timeout, "headers": self.headers()}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def get(
        self,
        client: httpx.AsyncClient,
        path: str,
        *,
        target: str,
    ) -> httpx.Response:
        url = f"{self._base}{path}"
        logger.debug("GET %s", url)
        try:
            resp = await client.get(url)
        except httpx.TransportError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise NetworkError(target, exc) from exc
        logger.debug("GET %s -> %d", url, resp.status_code)
        return resp

    async def get_openapi_document(self, client: httpx.AsyncClient) -> httpx.Response:
        return await self.get(client, OPENAPI_PATH, target="Dokploy OpenAPI document")

    async def get_projects(self, client: httpx.AsyncClient) -> httpx.Response:
        return await self.get(client, PROJECTS_PATH, target="Dokploy projects")
