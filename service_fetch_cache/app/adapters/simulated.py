"""
Simulated upstream with a fixed delay, for demos and tests.
"""

import asyncio
import functools
from typing import Awaitable, Callable

DEFAULT_DELAY_SECONDS = 1.0


async def simulated_fetch(url: str, delay: float = DEFAULT_DELAY_SECONDS) -> str:
    """Wait ``delay`` seconds, then answer ``"Data from <url>"``."""
    await asyncio.sleep(delay)
    return f"Data from {url}"


def make_simulated_fetch(delay: float = DEFAULT_DELAY_SECONDS) -> Callable[[str], Awaitable[str]]:
    if delay < 0:
        raise ValueError("delay must be non-negative")
    return functools.partial(simulated_fetch, delay=delay)
