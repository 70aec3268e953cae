"""
HTTP fetcher used as the upstream of the API cache.
"""

from typing import Any, Optional
import httpx

from shared.logging import get_logger
from shared.errors import UpstreamFailure
from shared.retry import retry_on_exception, RetryConfig, RetryError


class HttpFetcher:
    """Fetch a URL with ``GET`` and return its decoded body.

    Transport errors (connection refused, timeouts) are retried according to
    ``retry_config``. Non-2xx responses are not retried: they surface at once
    as :class:`UpstreamFailure`, which keeps the URL out of the cache.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        retry_config: Optional[RetryConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig(
            max_attempts=3,
            base_delay=0.5,
            max_delay=5.0,
            exponential_base=2.0,
            jitter=True
        )
        self._transport = transport
        self.logger = get_logger("fetch_cache.http_fetcher")
        self._get = retry_on_exception((httpx.TransportError,), config=self.retry_config)(self._request)

    async def __call__(self, url: str) -> Any:
        try:
            response = await self._get(url)
        except RetryError as exc:
            self.logger.error("Upstream unreachable", url=url, attempts=exc.attempts, error=str(exc.last_exception))
            raise UpstreamFailure(
                source=url,
                message=str(exc.last_exception) or type(exc.last_exception).__name__,
                details={"url": url, "attempts": exc.attempts}
            ) from exc

        if response.is_success:
            self.logger.debug("Upstream response received", url=url, status_code=response.status_code)
            return self._decode(url, response)

        self.logger.error(
            "Upstream request failed",
            url=url,
            status_code=response.status_code,
        )
        raise UpstreamFailure(
            source=url,
            message=f"Unexpected status {response.status_code}",
            details={"url": url, "status_code": response.status_code, "body": response.text[:500]}
        )

    async def _request(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.get(url)

    def _decode(self, url: str, response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            return response.text

        try:
            return response.json()
        except ValueError as exc:
            self.logger.error("Upstream returned invalid JSON", url=url, error=str(exc))
            raise UpstreamFailure(
                source=url,
                message="Invalid JSON body",
                details={"url": url, "status_code": response.status_code, "body": response.text[:500]}
            ) from exc
