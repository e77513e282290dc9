"""Utility functions for the mortgage calculator.

This module provides helpers for coercing user input into ``Decimal`` values,
rounding money to whole cents and describing month counts in words. All
engine arithmetic runs in the module-wide decimal context set here.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from typing import Union

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number or numeric string into a ``Decimal``.

    Floats go through ``str`` so that ``4.5`` becomes ``Decimal("4.5")``
    rather than its binary expansion. Strings may contain commas as thousands
    separators. Raises ``ValueError`` if conversion fails.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    try:
        cleaned = str(value).replace(",", "").strip()
        result = Decimal(cleaned)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value!r}")
    return result


def round_cents(amount: Decimal) -> Decimal:
    """Round to the nearest cent, halves away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def ceil_cents(amount: Decimal) -> Decimal:
    """Round up to the next whole cent."""
    return amount.quantize(CENT, rounding=ROUND_CEILING)


def format_years_months(total_months: int) -> str:
    """Describe a month count as ``"N years M months"``.

    >>> format_years_months(157)
    '13 years 1 month'
    """
    if total_months < 0:
        return "-" + format_years_months(-total_months)
    years, months = divmod(int(total_months), 12)
    if years == 0:
        return f"{months} month{'' if months == 1 else 's'}"
    if months == 0:
        return f"{years} year{'' if years == 1 else 's'}"
    return (
        f"{years} year{'' if years == 1 else 's'} "
        f"{months} month{'' if months == 1 else 's'}"
    )
