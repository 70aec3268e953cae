"""
Minimal captured-state examples: a secret holder and a counter.
"""

from typing import Callable

from .models import CounterHandle

DEFAULT_SECRET = "I am hidden!"


def make_secret_keeper(secret: str = DEFAULT_SECRET) -> Callable[[], str]:
    """Return a function that still sees ``secret`` after this call returns."""

    def reveal() -> str:
        return secret

    return reveal


def make_counter(start: int = 0) -> CounterHandle:
    count = start

    def inc() -> int:
        nonlocal count
        count += 1
        return count

    def dec() -> int:
        nonlocal count
        count -= 1
        return count

    return CounterHandle(inc=inc, dec=dec)
