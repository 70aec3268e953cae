"""
Unit tests for the Fetch Cache main service.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_fetch_cache.app.main import FetchCacheService, create_app
from service_fetch_cache.app.adapters.http_fetcher import HttpFetcher
from shared.config import get_config
from shared.retry import RetryConfig


class TestFetchCacheService:
    """Test cases for FetchCacheService."""

    @pytest.fixture
    def upstream_hits(self):
        """Per-path upstream request counts."""
        return {}

    @pytest.fixture
    def fetcher(self, upstream_hits):
        """HttpFetcher backed by an in-memory upstream."""
        def handler(request):
            path = request.url.path
            upstream_hits[path] = upstream_hits.get(path, 0) + 1
            if path.startswith("/missing"):
                return httpx.Response(404, text="not here")
            return httpx.Response(200, json={"path": path})

        return HttpFetcher(
            timeout=1.0,
            retry_config=RetryConfig(max_attempts=1, base_delay=0.0, jitter=False),
            transport=httpx.MockTransport(handler),
        )

    @pytest.fixture
    def service(self, fetcher):
        """Create FetchCacheService instance."""
        return FetchCacheService(fetcher=fetcher)

    @pytest.fixture
    def client(self, service):
        """Create test client."""
        return TestClient(service.app)

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "fetch_cache"
        assert "memoization" in data["capabilities"]

    def test_health_endpoint(self, client):
        """Test health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "fetch_cache"
        assert data["status"] == "ok"
        assert data["dependencies"] == {"cache": "ok"}

    def test_fetch_is_memoized(self, client, upstream_hits):
        """Second request for a URL is served from cache."""
        url = "https://upstream.test/users/1"

        first = client.get("/fetch", params={"url": url})
        second = client.get("/fetch", params={"url": url})

        assert first.status_code == 200
        assert first.json() == {"url": url, "data": {"path": "/users/1"}, "cached": False}
        assert second.json() == {"url": url, "data": {"path": "/users/1"}, "cached": True}
        assert upstream_hits == {"/users/1": 1}

    def test_upstream_failure_maps_to_502(self, client, upstream_hits):
        """Failures return the shared error body and are not cached."""
        url = "https://upstream.test/missing/1"

        first = client.get("/fetch", params={"url": url})
        second = client.get("/fetch", params={"url": url})

        assert first.status_code == 502
        body = first.json()
        assert body["code"] == "UPSTREAM_FAILURE"
        assert body["details"]["status_code"] == 404
        assert second.status_code == 502
        assert upstream_hits == {"/missing/1": 2}

    def test_fetch_requires_url(self, client):
        """Missing url parameter is a validation error."""
        response = client.get("/fetch")
        assert response.status_code == 422

    def test_cache_stats(self, client):
        """Stats reflect hits and misses."""
        client.get("/fetch", params={"url": "https://upstream.test/a"})
        client.get("/fetch", params={"url": "https://upstream.test/a"})
        client.get("/fetch", params={"url": "https://upstream.test/b"})

        stats = client.get("/cache/stats").json()

        assert stats["name"] == "http"
        assert stats["hits"] == 1
        assert stats["misses"] == 2
        assert stats["upstream_calls"] == 2

    def test_metrics_endpoint(self, client):
        """Cache counters are exported for Prometheus."""
        client.get("/fetch", params={"url": "https://upstream.test/a"})
        client.get("/fetch", params={"url": "https://upstream.test/a"})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert 'cache_hits_total{cache_name="http"} 1.0' in response.text

    def test_request_id_echoed(self, client):
        """Request IDs are propagated back to the caller."""
        response = client.get("/", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_coalescing_from_config(self, fetcher, monkeypatch):
        """coalesce_inflight is read from the environment."""
        monkeypatch.setenv("FETCH_CACHE_COALESCE_INFLIGHT", "false")
        service = FetchCacheService(config=get_config("fetch_cache", 8020), fetcher=fetcher)

        assert service.cache.coalesce is False

    def test_create_app(self):
        """create_app builds a FastAPI application."""
        app = create_app()
        paths = {route.path for route in app.routes}
        assert {"/", "/fetch", "/cache/stats", "/health", "/metrics"} <= paths
