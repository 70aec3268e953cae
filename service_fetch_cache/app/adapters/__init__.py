"""
Adapters package for the Fetch Cache Service.

Upstream retrieval operations that the memoizing cache wraps:

- HttpFetcher: real HTTP GET with retries, failures mapped to UpstreamFailure
- simulated_fetch: fixed-delay stand-in used by the demo and tests
"""

from .http_fetcher import HttpFetcher
from .simulated import simulated_fetch, make_simulated_fetch

__all__ = [
    "HttpFetcher",
    "simulated_fetch",
    "make_simulated_fetch",
]
