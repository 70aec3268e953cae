"""
Closure examples.

Each factory captures private state and hands back only a callable; the
state is reachable through nothing else. These are the small siblings of
``app.caching.MemoizedFetch``.
"""

from .basics import make_secret_keeper, make_counter
from .login import make_login_tracker
from .pricing import make_discount_calculator, make_coupon
from .models import CounterHandle, LoginOutcome, LoginStatus, DiscountQuote, CouponOutcome

__all__ = [
    "make_secret_keeper",
    "make_counter",
    "make_login_tracker",
    "make_discount_calculator",
    "make_coupon",
    "CounterHandle",
    "LoginOutcome",
    "LoginStatus",
    "DiscountQuote",
    "CouponOutcome",
]
