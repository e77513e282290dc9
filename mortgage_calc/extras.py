"""Scheduling of recurring annual lump-sum payments.

An annual extra payment falls due once a year in a fixed month: month 1 for
``start``, 6 for ``middle`` and 12 for ``end``. The simulator advances time in
whole payment periods, so a due month is detected when a period carries the
elapsed time across it.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Dict, Union

from .data_models import YearlyPaymentTiming, coerce_enum
from .utils import Number, to_decimal

Months = Union[Fraction, Decimal, int, float]

DEFAULT_DUE_YEARS = 50

ANCHOR_MONTHS: Dict[YearlyPaymentTiming, int] = {
    YearlyPaymentTiming.START: 1,
    YearlyPaymentTiming.MIDDLE: 6,
    YearlyPaymentTiming.END: 12,
}


def anchor_month(timing) -> int:
    """Month of the year (1-12) in which the annual extra payment is made."""
    return ANCHOR_MONTHS[coerce_enum(YearlyPaymentTiming, timing)]


def due_year_bound(amortization_years: int = 0) -> int:
    """Last year index checked for due months.

    At least 50 years, and never less than twice the amortization length.
    """
    return max(DEFAULT_DUE_YEARS, 2 * int(amortization_years))


def is_extra_payment_due(
    current_months: Months,
    previous_months: Months,
    yearly_amount: Number,
    timing,
    max_years: int = DEFAULT_DUE_YEARS,
) -> bool:
    """Return True when a due month lies in ``(previous_months, current_months]``.

    Due months are ``year * 12 + anchor`` for ``year`` in ``0..max_years``.
    Always False when ``yearly_amount`` is not positive.
    """
    if to_decimal(yearly_amount) <= 0:
        return False
    anchor = anchor_month(timing)
    current = Fraction(current_months)
    previous = Fraction(previous_months)
    if current <= previous:
        return False
    # Smallest year whose due month lies strictly after previous_months.
    year = max(0, (previous - anchor) // 12 + 1)
    if year > max_years:
        return False
    return year * 12 + anchor <= current
