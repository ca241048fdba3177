"""Decimal quantization helpers for money, prices and quantities."""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

from miubank.core.exceptions import ValidationError

Number = Union[Decimal, int, str]

ZERO = Decimal("0")
CENT = Decimal("0.01")
PRICE_QUANTUM = Decimal("0.000001")
QUANTITY_QUANTUM = Decimal("0.00000001")


def to_decimal(value: Number) -> Decimal:
    """Convert input to Decimal without passing through binary float."""
    if isinstance(value, Decimal):
        result = value
    else:
        # str() of a float is its shortest round-tripping literal, not the binary expansion
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValidationError(f"Not a valid number: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Not a finite number: {value!r}")
    return result


def _quantize(value: Number, quantum: Decimal) -> Decimal:
    try:
        return to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        # more digits than the decimal context precision allows
        raise ValidationError(f"Amount out of range: {value!r}") from exc


def to_money(value: Number) -> Decimal:
    """Quantize to cents (ROUND_HALF_UP)."""
    return _quantize(value, CENT)


def to_price(value: Number) -> Decimal:
    """Quantize a unit price to 6 decimal places."""
    return _quantize(value, PRICE_QUANTUM)


def to_quantity(value: Number) -> Decimal:
    """Quantize an asset quantity to 8 decimal places."""
    return _quantize(value, QUANTITY_QUANTUM)
