# tests/dashboard/test_view.py
from __future__ import annotations

import pytest

from dokdash.core.errors import UpstreamHttpError
from dokdash.dashboard.loader import HttpConfigLoader
from dokdash.dashboard.pins import MemoryStorage, PinStore
from dokdash.dashboard.view import Dashboard


def _payload(projects):
    return {
        "projects": projects,
        "meta": {"title": "Dokploy", "fetchedAt": "2024-06-01T12:30:00.000Z"},
    }


class FakeLoader:
    """Returns queued results; exceptions in the queue are raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def pins():
    return PinStore(MemoryStorage())


class TestDashboard:
    def test_initial_state_is_loading(self, pins):
        dashboard = Dashboard(FakeLoader(), pins)
        assert dashboard.status == "loading"
        assert dashboard.view_state == "loading"
        assert dashboard.entries == []

    @pytest.mark.asyncio
    async def test_load_success(self, pins, projects_payload):
        dashboard = Dashboard(FakeLoader(_payload(projects_payload)), pins)
        await dashboard.load()

        assert dashboard.status == "idle"
        assert dashboard.error is None
        assert dashboard.view_state == "content"
        assert dashboard.data.meta.title == "Dokploy"
        assert [e.title for e in dashboard.entries] == ["gateway", "analytics", "frontend", "website-db"]

    @pytest.mark.asyncio
    async def test_empty_projects(self, pins):
        dashboard = Dashboard(FakeLoader(_payload([])), pins)
        await dashboard.load()
        assert dashboard.view_state == "empty"

    @pytest.mark.asyncio
    async def test_loader_error(self, pins):
        loader = FakeLoader(UpstreamHttpError("Dokploy projects", 503, "Service Unavailable"))
        dashboard = Dashboard(loader, pins)
        await dashboard.load()

        assert dashboard.status == "idle"
        assert dashboard.data is None
        assert dashboard.view_state == "error"
        assert dashboard.error == "Unable to load Dokploy projects (503 Service Unavailable)"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc, message",
        [
            (RuntimeError("decoder exploded"), "decoder exploded"),
            (RuntimeError(), "Unknown error"),
        ],
    )
    async def test_unexpected_loader_error(self, pins, exc, message):
        dashboard = Dashboard(FakeLoader(exc), pins)
        await dashboard.load()

        assert dashboard.status == "idle"
        assert dashboard.data is None
        assert dashboard.view_state == "error"
        assert dashboard.error == message

    @pytest.mark.asyncio
    async def test_invalid_server_url_sets_error(self, pins):
        dashboard = Dashboard(HttpConfigLoader("http://host:notaport"), pins)
        await dashboard.load()

        assert dashboard.status == "idle"
        assert dashboard.view_state == "error"
        assert dashboard.error

    @pytest.mark.asyncio
    async def test_revalidation_failure_sets_error(self, pins):
        dashboard = Dashboard(FakeLoader({"projects": [], "meta": {}}), pins)
        await dashboard.load()

        assert dashboard.view_state == "error"
        assert "meta.fetchedAt" in dashboard.error

    @pytest.mark.asyncio
    async def test_retry_after_error(self, pins, projects_payload):
        loader = FakeLoader(
            UpstreamHttpError("Dokploy projects", 502, "Bad Gateway"),
            _payload(projects_payload),
        )
        dashboard = Dashboard(loader, pins)

        await dashboard.load()
        assert dashboard.view_state == "error"

        await dashboard.retry()
        assert loader.calls == 2
        assert dashboard.view_state == "content"
        assert dashboard.error is None

    @pytest.mark.asyncio
    async def test_pinned_entries_come_first(self, pins, projects_payload):
        dashboard = Dashboard(FakeLoader(_payload(projects_payload)), pins)
        await dashboard.load()

        dashboard.toggle_pin("db-main")

        assert [e.id for e in dashboard.pinned_entries] == ["db-main"]
        assert "db-main" not in [e.id for e in dashboard.regular_entries]
        assert len(dashboard.pinned_entries) + len(dashboard.regular_entries) == len(dashboard.entries)

    @pytest.mark.asyncio
    async def test_pin_then_unpin_restores_partition(self, pins, projects_payload):
        dashboard = Dashboard(FakeLoader(_payload(projects_payload)), pins)
        await dashboard.load()
        before = dashboard.partition()

        dashboard.toggle_pin("app-frontend")
        assert dashboard.partition() != before
        dashboard.toggle_pin("app-frontend")

        assert dashboard.partition() == before
