"""
Exact decimal handling for posting amounts and balances.

Two entry points:

    parse_amount(value)  - validate a caller-supplied posting amount
    to_decimal(value)    - convert anything read back from storage
                           (Decimal, int, numeric string, aggregate None)
    amount_limit()       - smallest value too large to store, as an
                           amount or as a balance

Neither function ever routes a value through binary floating point
arithmetic. A float handed in by a caller is converted through its
shortest round-tripping repr, so 10.5 becomes Decimal("10.5") and
0.1 becomes Decimal("0.1"), never 0.1000000000000000055511151231257827.

Usage:
    from ledger.amounts import parse_amount, to_decimal

    amount = parse_amount("12.34")       # Decimal("12.34")
    total = to_decimal(row["total"])     # Decimal("0") when row is None
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from django.conf import settings

from accounts.models import BALANCE_DECIMAL_PLACES, BALANCE_MAX_DIGITS

from .exceptions import InvalidAmount

if TYPE_CHECKING:
    from typing import Any

AMOUNT_DECIMAL_PLACES = BALANCE_DECIMAL_PLACES
AMOUNT_MAX_DIGITS = BALANCE_MAX_DIGITS

ZERO = Decimal("0")

_MAX_INTEGER_DIGITS = AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES


def max_integer_digits() -> int:
    """Integer digits the active store keeps exactly (LEDGER_MAX_INTEGER_DIGITS)."""
    configured = getattr(settings, "LEDGER_MAX_INTEGER_DIGITS", _MAX_INTEGER_DIGITS)
    return min(configured, _MAX_INTEGER_DIGITS)


def amount_limit() -> Decimal:
    """
    Smallest value too large to store as an amount or a balance.

    Example:
        amount_limit()  # Decimal("1E+11") on SQLite, Decimal("1E+16") on PostgreSQL
    """
    return Decimal(10) ** max_integer_digits()


def to_decimal(value: Any) -> Decimal:
    """
    Convert a stored or aggregated numeric value to Decimal.

    Args:
        value: Decimal, int, numeric string, float, or None

    Returns:
        Exact Decimal; None (empty aggregate) becomes Decimal("0")

    Raises:
        TypeError: If the value has no numeric interpretation
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Cannot convert {value!r} to Decimal")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, (float, str)):
        try:
            return Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise TypeError(f"Cannot convert {value!r} to Decimal") from exc
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def parse_amount(value: Any) -> Decimal:
    """
    Validate a caller-supplied posting amount.

    Args:
        value: Decimal, int, numeric string or float

    Returns:
        The amount as an exact, strictly positive Decimal

    Raises:
        InvalidAmount: If the value is not numeric, not finite, not
            positive, has more than four fractional digits, or does not
            fit the storage column
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmount(value, "amount must be a number")

    try:
        amount = to_decimal(value)
    except TypeError:
        raise InvalidAmount(value, "amount must be a number")

    if not amount.is_finite():
        raise InvalidAmount(value, "amount must be finite")
    if amount <= ZERO:
        raise InvalidAmount(value, "amount must be greater than zero")

    exponent = amount.normalize().as_tuple().exponent
    if exponent < -AMOUNT_DECIMAL_PLACES:
        raise InvalidAmount(
            value,
            f"amount supports at most {AMOUNT_DECIMAL_PLACES} decimal places",
        )
    if amount >= amount_limit():
        raise InvalidAmount(value, "amount is too large")

    return amount
