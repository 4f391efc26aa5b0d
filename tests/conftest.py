# tests/conftest.py
from __future__ import annotations

import copy
from typing import Any, Callable

import httpx
import pytest

from dokdash.core.config import Settings

BASE_URL = "https://dokploy.example.com"

OPENAPI_DOCUMENT: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {
        "title": "Dokploy API",
        "version": "1.0.0",
        "description": "Endpoints for dokploy",
    },
    "servers": [{"url": "https://dokploy.example.com/api"}],
    "paths": {},
}

PROJECTS: list[dict[str, Any]] = [
    {
        "projectId": "p-web",
        "name": "Website",
        "description": None,
        "createdAt": "2024-05-01T10:00:00.000Z",
        "environments": [
            {
                "environmentId": "env-prod",
                "name": "production",
                "applications": [
                    {
                        "applicationId": "app-frontend",
                        "name": "frontend",
                        "appName": "website-frontend-x1",
                        "applicationStatus": "done",
                        "domains": [
                            {"domainId": "d1", "host": "www.example.com", "https": True, "port": 443, "path": "/"},
                            {"domainId": "d2", "host": "staging.eu.example.com", "https": False, "port": 8080, "path": "/app"},
                        ],
                    },
                ],
                "compose": [
                    {"composeId": "cmp-analytics", "name": "analytics", "composeStatus": "running", "domains": None},
                ],
                "postgres": [
                    {"databaseId": "db-main", "appName": "website-db"},
                ],
                "redis": None,
            }
        ],
    },
    {
        "projectId": "p-api",
        "name": "Api",
        "environments": [
            {
                "name": "staging",
                "applications": [{"name": "gateway", "domains": []}],
            }
        ],
    },
]


@pytest.fixture
def openapi_document() -> dict[str, Any]:
    return copy.deepcopy(OPENAPI_DOCUMENT)


@pytest.fixture
def projects_payload() -> list[dict[str, Any]]:
    return copy.deepcopy(PROJECTS)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        dokploy_base_url=BASE_URL,
        dokploy_api_key="secret-key",
        dokploy_timeout=5.0,
    )


@pytest.fixture
def dokploy_transport(openapi_document, projects_payload) -> Callable[..., httpx.MockTransport]:
    """Factory for a fake Dokploy API.

    Each leg may be overridden with a JSON-able body, an ``httpx.Response``
    or an exception to raise. Requests are appended to ``calls`` if given.
    """

    def make(
        *,
        openapi: Any = openapi_document,
        projects: Any = projects_payload,
        calls: list[httpx.Request] | None = None,
    ) -> httpx.MockTransport:
        def respond(leg: Any, request: httpx.Request) -> httpx.Response:
            if isinstance(leg, Exception):
                raise leg
            if isinstance(leg, httpx.Response):
                return httpx.Response(
                    leg.status_code, content=leg.content, headers=leg.headers
                )
            return httpx.Response(200, json=leg)

        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request)
            if request.url.path.endswith("/settings.getOpenApiDocument"):
                return respond(openapi, request)
            if request.url.path.endswith("/project.all"):
                return respond(projects, request)
            return httpx.Response(404)

        return httpx.MockTransport(handler)

    return make
