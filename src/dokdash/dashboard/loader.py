# dokdash/dashboard/loader.py
"""
Sources of the aggregated payload for a ``Dashboard``.

A loader is any async callable returning the JSON-decoded ``ConfigResponse``
body; the dashboard validates it again before use.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable

import httpx

from dokdash.core.aggregator import ConfigAggregator
from dokdash.core.errors import DashboardError, NetworkError

ConfigLoader = Callable[[], Awaitable[Any]]


class HttpConfigLoader:
    """Reads ``/api/config`` from a running dashboard server."""

    def __init__(
        self,
        server_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = f"{server_url.rstrip('/')}/api/config"
        self._timeout = timeout
        self._transport = transport

    async def __call__(self) -> Any:
        kwargs: dict[str, Any] = {"timeout": self._timeout}
        if self._transport is not None:
            kwargs["transport"] = self._transport

        async with httpx.AsyncClient(**kwargs) as client:
            try:
                resp = await client.get(self._url, headers={"Cache-Control": "no-store"})
            except httpx.TransportError as exc:
                raise NetworkError("dashboard server", exc) from exc

        if not resp.is_success:
            raise DashboardError(_error_message(resp))
        try:
            return resp.json()
        except ValueError as exc:
            raise DashboardError("Dashboard server returned a non-JSON body") from exc


class AggregatorLoader:
    """Runs the aggregation in-process, without a server."""

    def __init__(self, aggregator: ConfigAggregator) -> None:
        self._aggregator = aggregator

    async def __call__(self) -> Any:
        payload = await self._aggregator.fetch_config()
        return payload.to_wire()


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return f"{resp.status_code} {resp.reason_phrase}".strip()
