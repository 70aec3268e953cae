"""
Fetch Cache Service.
"""

from typing import Any, Dict, Optional

from fastapi import Query

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from shared.retry import RetryConfig

from .adapters.http_fetcher import HttpFetcher
from .caching.memoized_fetch import MemoizedFetch, create_api_cache

SERVICE_NAME = "fetch_cache"
DEFAULT_PORT = 8020


class FetchCacheService(BaseService):
    """Serves upstream URLs through a memoizing cache."""

    def __init__(self, config: Optional[ServiceConfig] = None, fetcher: Optional[HttpFetcher] = None):
        super().__init__(SERVICE_NAME, DEFAULT_PORT, config=config)

        self.fetcher = fetcher or HttpFetcher(
            timeout=self.config.fetch_timeout_seconds,
            retry_config=RetryConfig(
                max_attempts=self.config.fetch_max_attempts,
                base_delay=self.config.fetch_retry_base_delay,
                max_delay=5.0,
            ),
        )
        self.cache: MemoizedFetch[str, Any] = create_api_cache(
            self.fetcher,
            name="http",
            coalesce=self.config.coalesce_inflight,
            metrics=self.metrics if self.config.enable_metrics else None,
        )

        self._setup_cache_routes()

    def _setup_cache_routes(self):
        """Set up cache-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": self.service_name,
                "message": "Fetch Cache Service",
                "version": "1.0.0",
                "capabilities": ["fetch", "memoization", "stats"]
            }

        @self.app.get("/fetch")
        async def fetch(url: str = Query(..., min_length=1, description="Upstream URL to retrieve")) -> Dict[str, Any]:
            """Fetch ``url`` once; later requests for it are served from cache."""
            result = await self.cache.resolve(url)
            return {"url": url, "data": result.value, "cached": result.cached}

        @self.app.get("/cache/stats")
        async def cache_stats():
            """Counters for the service's cache."""
            return self.cache.stats()

    async def _check_dependencies(self) -> Dict[str, str]:
        return {"cache": "ok"}


def create_app(config: Optional[ServiceConfig] = None):
    """Create fetch cache service application."""
    service = FetchCacheService(config=config)
    return service.app


if __name__ == "__main__":
    service = FetchCacheService(config=get_config(SERVICE_NAME, DEFAULT_PORT))
    service.run()
