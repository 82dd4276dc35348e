"""Fixed-point money helpers (2 decimal places)"""

from decimal import Decimal, InvalidOperation, ROUND_FLOOR, ROUND_HALF_UP
from typing import Union

from credit_plans.domain.exceptions import InvalidAmount

Q2 = Decimal("0.01")
ZERO = Decimal("0.00")


def round2(x: Decimal) -> Decimal:
    """Round to cents, half away from zero"""
    return x.quantize(Q2, rounding=ROUND_HALF_UP)


def floor2(x: Decimal) -> Decimal:
    """Truncate toward negative infinity at the cent"""
    return x.quantize(Q2, rounding=ROUND_FLOOR)


def parse_amount(raw: Union[str, int, float, Decimal]) -> Decimal:
    """
    Parse a user-entered amount into a Decimal.

    Strings may use "," as the decimal separator ("1500,50" -> 1500.50).
    Every comma is treated as a separator, so "1,234.50" is rejected rather
    than guessed at.

    Raises:
        InvalidAmount: Input is empty, not numeric, or not finite
    """
    if isinstance(raw, bool):
        raise InvalidAmount(f"Invalid amount: {raw!r}")

    try:
        if isinstance(raw, Decimal):
            value = raw
        elif isinstance(raw, str):
            value = Decimal(raw.strip().replace(",", "."))
        elif isinstance(raw, (int, float)):
            # str() keeps 0.1 as Decimal("0.1") instead of its binary expansion
            value = Decimal(str(raw))
        else:
            raise InvalidAmount(f"Invalid amount: {raw!r}")
    except InvalidOperation as e:
        raise InvalidAmount(f"Invalid amount: {raw!r}") from e

    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite: {raw!r}")

    return value
