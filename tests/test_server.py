"""Tests for the HTTP API."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from seo_headings.config import AnalysisConfig
from seo_headings.core import AnalysisError, run_analysis
from seo_headings.server import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def report(site, fake_fetcher):
    return run_analysis(AnalysisConfig(start_url="https://example.com/"), fetch=fake_fetcher(site))


class TestApi:
    """Test cases for the FastAPI app."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "OK"
        assert "timestamp" in response.json()

    def test_analyze_requires_start_url(self, client):
        with patch("seo_headings.server.run_analysis") as run:
            response = client.post("/analyze", json={"maxPages": 3})

        assert response.status_code == 400
        assert response.json()["error"] == "startUrl is required"
        run.assert_not_called()

    def test_analyze(self, client, report):
        with patch("seo_headings.server.run_analysis", return_value=report) as run:
            response = client.post("/analyze", json={
                "startUrl": "https://example.com",
                "crawlUrls": True,
                "maxPages": 3,
                "includeHeadingStructure": False,
            })

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"domain", "pages", "analysis"}
        assert body["pages"][0]["url"] == "https://example.com/"

        config = run.call_args.args[0]
        assert config.start_url == "https://example.com"
        assert config.crawl_urls is True
        assert config.max_pages == 3
        assert config.include_heading_structure is False

    def test_analyze_general_failure(self, client):
        with patch("seo_headings.server.run_analysis", side_effect=AnalysisError("boom")):
            response = client.post("/analyze", json={"startUrl": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "message": "boom"}

    def test_analyze_invalid_input(self, client):
        response = client.post("/analyze", json={"startUrl": "ftp://example.com/file"})

        assert response.status_code == 400

    @pytest.mark.parametrize("key", ["timeout", "timeoutMs"])
    def test_analyze_accepts_timeout_keys(self, client, report, key):
        with patch("seo_headings.server.run_analysis", return_value=report) as run:
            response = client.post("/analyze", json={"startUrl": "https://example.com", key: 1234})

        assert response.status_code == 200
        assert run.call_args.args[0].timeout_ms == 1234
