from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Union

from .errors import InvalidInput

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal(100)

NumberLike = Union[int, float, str, Decimal]


def to_decimal(value: Any, field: Optional[str] = None) -> Decimal:
    """Convert a number to ``Decimal`` preserving precision for ints/floats/strings."""

    if isinstance(value, bool):
        raise InvalidInput(f"Unsupported numeric type: {type(value)!r}", field=field)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        if value.strip() == "":
            raise InvalidInput("empty string is not a valid amount", field=field)
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise InvalidInput(f"Invalid amount: {value!r}", field=field) from exc
    else:
        raise InvalidInput(f"Unsupported numeric type: {type(value)!r}", field=field)
    if not result.is_finite():
        raise InvalidInput(f"Amount must be finite, got {value!r}", field=field)
    return result


def non_negative(value: Any, field: str) -> Decimal:
    amount = to_decimal(value, field)
    if amount < 0:
        raise InvalidInput(f"{field} must be non-negative, got {value!r}", field=field)
    return amount


def round_cents(value: Any) -> Decimal:
    """Round the supplied value to cents using HALF_UP."""

    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_float(value: Decimal) -> float:
    return float(round_cents(value))
