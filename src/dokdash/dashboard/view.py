# dokdash/dashboard/view.py
"""
Presentation state of the dashboard.

States: ``loading`` while a load is in flight, ``idle`` afterwards with
either data or an error message. A failed load is left as is until
``retry()``; nothing polls.
"""
from __future__ import annotations

import logging
from typing import Literal

from pydantic import ValidationError

from dokdash.contracts.dokploy import ConfigResponse
from dokdash.contracts.entry import ResourceEntry
from dokdash.core.errors import DashboardError, PayloadValidationError
from dokdash.core.projection import flatten_projects, partition_entries
from dokdash.dashboard.loader import ConfigLoader
from dokdash.dashboard.pins import PinStore

logger = logging.getLogger(__name__)

Status = Literal["loading", "idle"]
ViewState = Literal["loading", "error", "empty", "content"]


class Dashboard:
    def __init__(self, loader: ConfigLoader, pins: PinStore) -> None:
        self._loader = loader
        self.pins = pins
        self.status: Status = "loading"
        self.data: ConfigResponse | None = None
        self.error: str | None = None
        self._entries: list[ResourceEntry] = []

    async def load(self) -> None:
        self.status = "loading"
        try:
            raw = await self._loader()
            try:
                data = ConfigResponse.model_validate(raw)
            except ValidationError as exc:
                raise PayloadValidationError(
                    "dashboard", exc.errors(include_url=False)
                ) from exc
        except DashboardError as exc:
            logger.warning("Failed to load dashboard data: %s", exc)
            self._set_result(None, str(exc) or "Unknown error")
        except Exception as exc:
            logger.exception("Unexpected error while loading dashboard data")
            self._set_result(None, str(exc) or "Unknown error")
        else:
            self._set_result(data, None)

    async def retry(self) -> None:
        await self.load()

    def _set_result(self, data: ConfigResponse | None, error: str | None) -> None:
        self.data = data
        self.error = error
        self._entries = flatten_projects(data.projects) if data else []
        self.status = "idle"

    @property
    def entries(self) -> list[ResourceEntry]:
        return list(self._entries)

    def partition(self) -> tuple[list[ResourceEntry], list[ResourceEntry]]:
        return partition_entries(self._entries, self.pins.ids)

    @property
    def pinned_entries(self) -> list[ResourceEntry]:
        return self.partition()[0]

    @property
    def regular_entries(self) -> list[ResourceEntry]:
        return self.partition()[1]

    @property
    def view_state(self) -> ViewState:
        if self.error:
            return "error"
        if self.status == "loading" and self.data is None:
            return "loading"
        if self.data is not None and not self._entries:
            return "empty"
        return "content"

    def toggle_pin(self, entry_id: str) -> bool:
        return self.pins.toggle(entry_id)
