"""
Pricing closures: percentage discount calculators and limited-use coupons.

Each factory call locks its configuration in at construction time. Prices
are handled as ``Decimal`` so that e.g. 15% off 100 is exactly 85.
"""

from decimal import Decimal
from typing import Callable

from shared.errors import ValidationError
from shared.logging import get_logger

from .models import Amount, CouponOutcome, DiscountQuote, to_amount

logger = get_logger("fetch_cache.pricing")


def _non_negative_price(price: Amount) -> Decimal:
    amount = to_amount(price, "price")
    if amount < 0:
        raise ValidationError("price must not be negative", {"price": str(amount)})
    return amount


def make_discount_calculator(discount_rate: Amount) -> Callable[[Amount], DiscountQuote]:
    """Return a calculator applying ``discount_rate`` (0.15 = 15% off)."""
    rate = to_amount(discount_rate, "discount_rate")
    if not Decimal(0) <= rate <= Decimal(1):
        raise ValidationError("discount_rate must be between 0 and 1", {"discount_rate": str(rate)})

    def calculate(price: Amount) -> DiscountQuote:
        original = _non_negative_price(price)
        return DiscountQuote(original=original, final=original - original * rate, rate=rate)

    return calculate


def make_coupon(code: str, discount: Amount, max_uses: int) -> Callable[[Amount], CouponOutcome]:
    """Return a coupon worth a fixed ``discount`` that works ``max_uses`` times.

    The final price is ``price - discount`` and is not floored at zero.
    """
    if not code:
        raise ValidationError("coupon code must not be empty")
    amount_off = to_amount(discount, "discount")
    if amount_off < 0:
        raise ValidationError("discount must not be negative", {"discount": str(amount_off)})
    if max_uses < 0:
        raise ValidationError("max_uses must not be negative", {"max_uses": max_uses})

    uses = 0

    def apply(price: Amount) -> CouponOutcome:
        nonlocal uses
        if uses >= max_uses:
            logger.info("Coupon expired", code=code, max_uses=max_uses)
            return CouponOutcome(code=code, applied=False)

        original = _non_negative_price(price)
        uses += 1
        return CouponOutcome(
            code=code,
            applied=True,
            final=original - amount_off,
            remaining_uses=max_uses - uses,
        )

    return apply
