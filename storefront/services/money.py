"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout. Catalog data
arrives loosely typed, so every coercion here is total: unusable input
becomes None (parse_decimal) or Decimal("0") (to_decimal), never an
exception.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

ZERO = Decimal("0")


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a value into a finite Decimal.

    Returns None for None, booleans, blank strings, NaN, infinities and
    anything Decimal cannot parse.
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            # Go through str to keep 0.1 as 0.1
            result = Decimal(str(value))
        elif isinstance(value, (int, str)):
            text = value.strip() if isinstance(value, str) else value
            if text == "":
                return None
            result = Decimal(text)
        else:
            return None
    except (InvalidOperation, ValueError, TypeError):
        return None

    if not result.is_finite():
        return None
    return result


def to_decimal(value: Any) -> Decimal:
    """
    Convert any value to Decimal safely.

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    parsed = parse_decimal(value)
    return ZERO if parsed is None else parsed


def non_negative(value: Any) -> Decimal:
    """max(0, value) over to_decimal."""
    return max(ZERO, to_decimal(value))


def multiply(value: Any, factor: Any) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
