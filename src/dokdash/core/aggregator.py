# dokdash/core/aggregator.py
"""
Aggregation of the two Dokploy reads into one ``ConfigResponse``.

The OpenAPI descriptor and the project list are requested concurrently and
joined once both settle. Failure of either leg fails the whole aggregation;
there is no partial payload.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from dokdash.contracts.dokploy import (
    ConfigResponse,
    Meta,
    OpenApiDocument,
    Project,
    parse_project_list,
)
from dokdash.core.clients.dokploy import DokployClient, normalize_base_url
from dokdash.core.config import Settings
from dokdash.core.errors import (
    ConfigurationError,
    PayloadValidationError,
    UpstreamHttpError,
)

logger = logging.getLogger(__name__)

OPENAPI_TARGET = "Dokploy OpenAPI document"
PROJECTS_TARGET = "Dokploy projects"
MISSING_BASE_URL = "Missing DOKPLOY_BASE_URL environment variable."

T = TypeVar("T")


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ConfigAggregator:
    """Builds the dashboard payload from a Dokploy instance.

    Holds configuration only; every ``fetch_config`` call opens its own
    HTTP client and shares nothing with concurrent calls.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._base_url = normalize_base_url(settings.dokploy_base_url)
        self._api_key = settings.dokploy_api_key or None
        self._timeout = settings.dokploy_timeout
        self._transport = transport
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def configured(self) -> bool:
        return self._base_url is not None

    def client(self) -> DokployClient:
        if self._base_url is None:
            raise ConfigurationError(MISSING_BASE_URL)
        return DokployClient(
            base_url=self._base_url,
            api_key=self._api_key,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def fetch_config(self) -> ConfigResponse:
        dokploy = self.client()

        async with dokploy.session() as session:
            openapi_result, projects_result = await asyncio.gather(
                dokploy.get_openapi_document(session),
                dokploy.get_projects(session),
                return_exceptions=True,
            )

        # Report the OpenAPI leg first when both fail
        openapi_resp = _settled(openapi_result)
        projects_resp = _settled(projects_result)
        _check_status(openapi_resp, OPENAPI_TARGET)
        _check_status(projects_resp, PROJECTS_TARGET)

        openapi = _decode(openapi_resp, OPENAPI_TARGET, OpenApiDocument.model_validate)
        projects = _decode(projects_resp, PROJECTS_TARGET, parse_project_list)

        payload = self.merge(openapi, projects)
        logger.debug(
            "Aggregated %d project(s) from %s", len(payload.projects), dokploy.base_url
        )
        return payload

    def merge(self, openapi: OpenApiDocument, projects: list[Project]) -> ConfigResponse:
        info = openapi.info
        meta = Meta(
            title=info.title if info else None,
            version=info.version if info else None,
            description=info.description if info else None,
            servers=[server.url for server in openapi.servers or []],
            fetched_at=utc_timestamp(self._clock()),
        )
        return ConfigResponse(projects=projects, meta=meta)


def _settled(result: httpx.Response | BaseException) -> httpx.Response:
    if isinstance(result, BaseException):
        raise result
    return result


def _check_status(resp: httpx.Response, target: str) -> None:
    if resp.is_success:
        return
    logger.warning(
        "%s request failed status=%d reason=%s", target, resp.status_code, resp.reason_phrase
    )
    raise UpstreamHttpError(target, resp.status_code, resp.reason_phrase)


def _decode(resp: httpx.Response, target: str, validate: Callable[[Any], T]) -> T:
    try:
        data = resp.json()
    except ValueError as exc:
        raise PayloadValidationError(target, detail="response body is not valid JSON") from exc

    try:
        return validate(data)
    except ValidationError as exc:
        logger.warning("%s failed validation: %d error(s)", target, exc.error_count())
        raise PayloadValidationError(target, exc.errors(include_url=False)) from exc
