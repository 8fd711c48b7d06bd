"""
Tests for the FastAPI service.
"""

import pytest
from fastapi.testclient import TestClient

from favgrab.web import create_app
from tests.helpers import FailingFetcher, StaticFetcher


@pytest.fixture
def client(config, static_fetcher):
    with TestClient(create_app(config, fetcher=static_fetcher)) as test_client:
        yield test_client


@pytest.mark.unit
class TestWebService:
    def test_lookup(self, client, static_fetcher):
        response = client.get("/api/lookup", params={"url": "example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["url"] == "https://example.com/"
        assert data["result"]["pageTitle"] == "Example"
        assert [icon["url"] for icon in data["result"]["icons"]] == [
            "https://example.com/icon32.png",
            "https://example.com/favicon.ico",
        ]
        assert static_fetcher.calls == ["https://example.com/"]

    def test_lookup_localized(self, client):
        response = client.get("/api/lookup", params={"url": "example.com", "locale": "zh"})
        assert response.json()["result"]["description"] == "未找到描述"

    def test_missing_url(self, client):
        response = client.get("/api/lookup")
        assert response.status_code == 400
        assert response.json()["error"] == "inputRequired"

    def test_invalid_url(self, client, static_fetcher):
        response = client.get("/api/lookup", params={"url": "not a url!!"})

        assert response.status_code == 400
        data = response.json()
        assert data["ok"] is False
        assert data["error"] == "invalidUrl"
        assert data["result"] == {"pageTitle": "", "keywords": "", "description": "", "icons": []}
        assert static_fetcher.calls == []

    def test_fetch_failure(self, config):
        with TestClient(create_app(config, fetcher=FailingFetcher())) as client:
            response = client.get("/api/lookup", params={"url": "example.com"})

        assert response.status_code == 502
        assert response.json()["error"] == "fetchError"

    def test_examples(self, client):
        response = client.get("/api/examples")
        assert response.status_code == 200
        assert {"name": "GitHub", "url": "github.com"} in response.json()
        assert len(response.json()) == 6

    def test_locales(self, client):
        assert client.get("/api/locales").json() == {"default": "en", "available": ["en", "zh"]}

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_metrics(self, client):
        client.get("/api/lookup", params={"url": "example.com"})
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "favgrab_lookups_total" in response.text

    def test_default_app_owns_relay_client(self, config):
        with TestClient(create_app(config)) as client:
            assert client.get("/health").status_code == 200
