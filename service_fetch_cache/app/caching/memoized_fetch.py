"""
Memoizing wrapper for asynchronous retrieval operations.

``MemoizedFetch`` owns a private key/value store and sits in front of an
``async (key) -> value`` callable. The first successful result for a key is
kept for the life of the wrapper and returned on every later call without
touching the upstream operation again. Failures are never stored, so the
next call for a failed key goes back upstream.

With ``coalesce=True`` concurrent callers for the same unresolved key share
one upstream call instead of each starting their own. Cancelling one of those
callers never fails the others; the shared call is cancelled only once no
caller is left waiting on it.
"""

import asyncio
import time
from dataclasses import dataclass, asdict
from typing import Any, Awaitable, Callable, Dict, Generic, Hashable, Optional, TypeVar

from shared.logging import get_logger
from shared.metrics import MetricsCollector

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class FetchResult(Generic[K, V]):
    """A resolved value and whether it was served from the store."""
    key: K
    value: V
    cached: bool


@dataclass
class CacheStats:
    """Per-instance counters. Counts only, never keys or values."""
    hits: int = 0
    misses: int = 0
    upstream_calls: int = 0
    upstream_failures: int = 0
    coalesced: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class _InFlight:
    """A shared upstream fetch and the number of callers awaiting it."""
    task: "asyncio.Task[Any]"
    waiters: int = 0


class MemoizedFetch(Generic[K, V]):
    """Per-instance memoizing cache in front of an async fetch function."""

    def __init__(
        self,
        fetch_function: Callable[[K], Awaitable[V]],
        *,
        name: str = "api_cache",
        coalesce: bool = False,
        metrics: Optional[MetricsCollector] = None,
    ):
        if not callable(fetch_function):
            raise TypeError("fetch_function must be callable")

        self.name = name
        self.logger = get_logger("fetch_cache.memoized_fetch")
        self._fetch = fetch_function
        self._coalesce = coalesce
        self._metrics = metrics
        self._store: Dict[K, V] = {}
        self._inflight: Dict[K, _InFlight] = {}
        self._stats = CacheStats()

    @property
    def coalesce(self) -> bool:
        return self._coalesce

    async def __call__(self, key: K) -> V:
        result = await self.resolve(key)
        return result.value

    async def resolve(self, key: K) -> FetchResult[K, V]:
        """Return the value for ``key``, fetching it upstream on a miss."""
        # No await on the hit path: a cached key never suspends the caller.
        if key in self._store:
            self._stats.hits += 1
            self._increment("cache_hits_total")
            self.logger.debug("Returning from cache", cache=self.name, key=key)
            return FetchResult(key, self._store[key], cached=True)

        self._stats.misses += 1
        self._increment("cache_misses_total")

        if self._coalesce:
            value = await self._join_inflight(key)
            return FetchResult(key, value, cached=False)

        value = await self._call_upstream(key)
        self._store[key] = value
        return FetchResult(key, value, cached=False)

    def stats(self) -> Dict[str, Any]:
        """Snapshot of this instance's counters."""
        return {"name": self.name, "coalesce": self._coalesce, **self._stats.to_dict()}

    async def _join_inflight(self, key: K) -> V:
        """Wait on the shared fetch for ``key``, starting it if needed.

        The fetch runs as its own task, so the caller that started it holds
        no special position: any caller may leave without affecting the
        others. The task is cancelled only when its last caller leaves.
        """
        entry = self._inflight.get(key)
        if entry is None:
            entry = _InFlight(asyncio.ensure_future(self._fetch_shared(key)))
            self._inflight[key] = entry
        else:
            self._stats.coalesced += 1
            self.logger.debug("Joining in-flight fetch", cache=self.name, key=key)

        entry.waiters += 1
        try:
            return await asyncio.shield(entry.task)
        finally:
            entry.waiters -= 1
            if entry.waiters == 0 and not entry.task.done():
                # Every caller was cancelled; later callers start afresh.
                if self._inflight.get(key) is entry:
                    del self._inflight[key]
                entry.task.cancel()

    async def _fetch_shared(self, key: K) -> V:
        try:
            value = await self._call_upstream(key)
        finally:
            entry = self._inflight.get(key)
            if entry is not None and entry.task is asyncio.current_task():
                del self._inflight[key]
        self._store[key] = value
        return value

    async def _call_upstream(self, key: K) -> V:
        self._stats.upstream_calls += 1
        self._increment("upstream_calls_total")
        self.logger.info("Fetching from upstream", cache=self.name, key=key)

        start = time.perf_counter()
        try:
            return await self._fetch(key)
        except Exception as exc:
            self._stats.upstream_failures += 1
            self._increment("upstream_failures_total")
            self.logger.warning(
                "Upstream fetch failed",
                cache=self.name,
                key=key,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise
        finally:
            if self._metrics is not None:
                self._metrics.observe_histogram(
                    "upstream_duration_seconds",
                    time.perf_counter() - start,
                    cache_name=self.name,
                )

    def _increment(self, metric_name: str) -> None:
        if self._metrics is not None:
            self._metrics.increment_counter(metric_name, cache_name=self.name)


def create_api_cache(
    fetch_function: Callable[[K], Awaitable[V]],
    *,
    name: str = "api_cache",
    coalesce: bool = False,
    metrics: Optional[MetricsCollector] = None,
) -> MemoizedFetch[K, V]:
    """Wrap ``fetch_function`` in a new cache with its own empty store."""
    return MemoizedFetch(fetch_function, name=name, coalesce=coalesce, metrics=metrics)
