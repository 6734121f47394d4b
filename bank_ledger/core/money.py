"""Money helpers.

Balances are persisted as integer minor units (cents) and surfaced as
``Decimal`` values with two fractional digits.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import ValidationError

CENT = Decimal("0.01")
# Largest balance or amount a signed 64-bit INTEGER column can hold, in cents.
MAX_CENTS = 2**63 - 1


def from_cents(cents: int) -> Decimal:
    return Decimal(cents).scaleb(-2)


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).to_integral_value())


def parse_amount(value: Any) -> Decimal:
    """Coerce ``value`` into a positive amount with at most two decimals.

    Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError("Amount is required.")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid amount: {value!r}") from exc

    if not amount.is_finite():
        raise ValidationError("Amount must be a finite number.")
    if amount <= 0:
        raise ValidationError("Amount must be greater than 0.")
    if amount.normalize().as_tuple().exponent < -2:
        raise ValidationError("Amount cannot have more than two decimal places.")
    try:
        amount = amount.quantize(CENT)
    except InvalidOperation as exc:
        raise ValidationError(f"Amount out of range: {value!r}") from exc
    if to_cents(amount) > MAX_CENTS:
        raise ValidationError(f"Amount out of range: {value!r}")
    return amount
