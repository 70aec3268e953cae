"""
Walkthrough scenarios for the closure examples and the API cache.

Each scenario returns the lines it would print so that the CLI and the tests
share one source of truth.
"""

from typing import Awaitable, Callable, Dict, List

from .adapters.simulated import make_simulated_fetch
from .caching.memoized_fetch import create_api_cache
from .closures import (
    make_coupon,
    make_counter,
    make_discount_calculator,
    make_login_tracker,
    make_secret_keeper,
)


async def secret_scenario(delay: float) -> List[str]:
    reveal = make_secret_keeper()
    return [reveal()]


async def counter_scenario(delay: float) -> List[str]:
    counter = make_counter()
    return [str(counter.inc()), str(counter.inc()), str(counter.dec())]


async def login_scenario(delay: float) -> List[str]:
    login = make_login_tracker()
    return [login(attempt).message for attempt in ("test", "wrong", "wrong", "secret123")]


async def discount_scenario(delay: float) -> List[str]:
    student = make_discount_calculator("0.15")
    festive = make_discount_calculator("0.25")
    vip = make_discount_calculator("0.40")
    return [student(100).message, festive(200).message, vip(500).message]


async def coupon_scenario(delay: float) -> List[str]:
    new_user = make_coupon("WELCOME50", 50, 2)
    festive = make_coupon("FESTIVE20", 20, 3)
    return [
        new_user(200).message,
        new_user(100).message,
        new_user(300).message,
        festive(120).message,
    ]


async def api_cache_scenario(delay: float) -> List[str]:
    cached_fetch = create_api_cache(make_simulated_fetch(delay), name="demo")
    lines = []
    for url in ("https://api.com/users/1", "https://api.com/users/1", "https://api.com/users/2"):
        result = await cached_fetch.resolve(url)
        source = "📦 cache" if result.cached else "🌐 api"
        lines.append(f"[{source}] {result.value}")
    stats = cached_fetch.stats()
    lines.append(f"upstream calls: {stats['upstream_calls']}, hits: {stats['hits']}")
    return lines


SCENARIOS: Dict[str, Callable[[float], Awaitable[List[str]]]] = {
    "secret": secret_scenario,
    "counter": counter_scenario,
    "login": login_scenario,
    "discount": discount_scenario,
    "coupon": coupon_scenario,
    "api-cache": api_cache_scenario,
}


async def run_scenarios(names: List[str], delay: float = 1.0) -> Dict[str, List[str]]:
    """Run the named scenarios in order and collect their output lines."""
    unknown = [name for name in names if name not in SCENARIOS]
    if unknown:
        raise KeyError(f"Unknown scenario(s): {', '.join(unknown)}")
    return {name: await SCENARIOS[name](delay) for name in names}
