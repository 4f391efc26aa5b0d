# tests/api/test_config_endpoint.py
from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from dokdash.core.config import Settings
from dokdash.main import create_app


@pytest.fixture
def make_client(settings, dokploy_transport):
    def make(settings=settings, **legs) -> TestClient:
        return TestClient(create_app(settings, transport=dokploy_transport(**legs)))

    return make


class TestConfigEndpoint:
    def test_returns_envelope(self, make_client):
        resp = make_client().get("/api/config")

        assert resp.status_code == 200
        assert resp.headers["cache-control"] == "no-store"
        body = resp.json()
        assert body["meta"]["title"] == "Dokploy API"
        assert body["meta"]["servers"] == ["https://dokploy.example.com/api"]
        assert body["meta"]["fetchedAt"].endswith("Z")
        assert [p["projectId"] for p in body["projects"]] == ["p-web", "p-api"]

    def test_unknown_upstream_fields_pass_through(self, make_client):
        body = make_client().get("/api/config").json()

        project = body["projects"][0]
        assert project["createdAt"] == "2024-05-01T10:00:00.000Z"
        app = project["environments"][0]["applications"][0]
        assert app["applicationStatus"] == "done"
        assert app["domains"][0]["domainId"] == "d1"

    def test_empty_project_list(self, make_client):
        resp = make_client(projects=[]).get("/api/config")
        assert resp.status_code == 200
        assert resp.json()["projects"] == []

    def test_missing_base_url(self, make_client):
        calls = []
        resp = make_client(settings=Settings(_env_file=None), calls=calls).get("/api/config")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Missing DOKPLOY_BASE_URL environment variable."}
        assert calls == []

    def test_openapi_failure_has_no_partial_payload(self, make_client):
        resp = make_client(openapi=httpx.Response(503)).get("/api/config")

        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Unable to load Dokploy OpenAPI document (503 Service Unavailable)"
        }

    def test_validation_failure(self, make_client):
        resp = make_client(projects={"not": "a list"}).get("/api/config")

        assert resp.status_code == 500
        assert resp.json()["error"].startswith("Invalid Dokploy projects payload")

    def test_network_failure(self, make_client):
        resp = make_client(openapi=httpx.ConnectError("refused")).get("/api/config")

        assert resp.status_code == 500
        assert resp.json()["error"].startswith("Unable to reach Dokploy OpenAPI document")

    def test_unexpected_error_is_reported(self, make_client, monkeypatch):
        client = make_client()

        async def boom(self):
            raise RuntimeError("kaboom")

        monkeypatch.setattr("dokdash.core.aggregator.ConfigAggregator.fetch_config", boom)
        resp = client.get("/api/config")

        assert resp.status_code == 500
        assert resp.json() == {"error": "kaboom"}


class TestEntriesEndpoint:
    def test_returns_sorted_entries(self, make_client):
        resp = make_client().get("/api/entries")

        assert resp.status_code == 200
        assert resp.headers["cache-control"] == "no-store"
        body = resp.json()
        assert [e["title"] for e in body["entries"]] == ["gateway", "analytics", "frontend", "website-db"]
        frontend = body["entries"][2]
        assert frontend == {
            "id": "app-frontend",
            "projectKey": "p-web",
            "title": "frontend",
            "projectName": "Website",
            "environmentName": "production",
            "sectionLabel": "Applications",
            "urls": ["https://www.example.com:443", "http://staging.eu.example.com:8080/app"],
        }
        assert body["meta"]["title"] == "Dokploy API"

    def test_error_shape_matches_config(self, make_client):
        resp = make_client(projects=httpx.Response(502)).get("/api/entries")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Unable to load Dokploy projects (502 Bad Gateway)"}
