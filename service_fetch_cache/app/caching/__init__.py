"""
Fetch cache caching package.

Provides the memoizing wrapper placed in front of slow or expensive
retrieval operations. Entries live for the lifetime of the wrapper; there is
no eviction, TTL or invalidation.
"""

from .memoized_fetch import MemoizedFetch, FetchResult, CacheStats, create_api_cache

__all__ = ["MemoizedFetch", "FetchResult", "CacheStats", "create_api_cache"]
