from __future__ import annotations

from decimal import Decimal
from typing import TypeAlias


DecimalLike: TypeAlias = Decimal | str | int | float

# Types accepted as a plain multiplier / divisor of a `Money` amount
Scalar: TypeAlias = Decimal | int | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Convert supported scalar types into Decimal.

    Floats go through `str` first, so the literal `12.23` becomes
    `Decimal("12.23")` and not its binary approximation.

    Args:
        value: Input value as Decimal, string, int or float.

    Returns:
        Value converted to Decimal.
    """

    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def is_scalar(value: object) -> bool:
    """Check whether $value is a number that can scale a monetary amount.

    Strings are not scalars here even though `as_decimal` parses them, and
    neither are booleans.
    """
    if isinstance(value, bool):
        return False

    return isinstance(value, (Decimal, int, float))
