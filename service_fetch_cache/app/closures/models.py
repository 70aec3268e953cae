"""
Result models returned by the closure examples.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Callable, Optional, Union

from shared.errors import ValidationError

Amount = Union[int, float, str, Decimal]


class LoginStatus(str, Enum):
    """Login attempt outcomes."""
    SUCCESS = "success"
    FAILURE = "failure"
    LOCKED = "locked"


@dataclass(frozen=True)
class CounterHandle:
    """Pair of operations sharing one captured count."""
    inc: Callable[[], int]
    dec: Callable[[], int]


@dataclass(frozen=True)
class LoginOutcome:
    """Result of a single login attempt."""
    status: LoginStatus
    remaining_attempts: int

    @property
    def message(self) -> str:
        if self.status is LoginStatus.LOCKED:
            return "Account locked!"
        if self.status is LoginStatus.SUCCESS:
            return "Login successful!"
        return f"Wrong password! {self.remaining_attempts} tries left"


@dataclass(frozen=True)
class DiscountQuote:
    """Price before and after a percentage discount."""
    original: Decimal
    final: Decimal
    rate: Decimal

    @property
    def message(self) -> str:
        return f"Original: ${format_amount(self.original)}, Final: ${format_amount(self.final)}"


@dataclass(frozen=True)
class CouponOutcome:
    """Result of applying a coupon to a price."""
    code: str
    applied: bool
    final: Optional[Decimal] = None
    remaining_uses: int = 0

    @property
    def message(self) -> str:
        if not self.applied:
            return f'❌ Coupon "{self.code}" expired!'
        return (
            f'✅ Coupon "{self.code}" applied! Final price: ${format_amount(self.final)} '
            f"(Remaining uses: {self.remaining_uses})"
        )


def to_amount(value: Amount, field: str) -> Decimal:
    """Convert a user-supplied number to ``Decimal``."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", {"field": field, "value": value})
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number", {"field": field, "value": str(value)})
    if not amount.is_finite():
        raise ValidationError(f"{field} must be finite", {"field": field, "value": str(value)})
    return amount


def format_amount(amount: Decimal) -> str:
    """Render without trailing zeros: 85.00 -> "85", 42.50 -> "42.5"."""
    text = format(amount.normalize(), "f")
    return "0" if text == "-0" else text
