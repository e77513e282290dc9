"""Conversion of quoted annual rates into per-period rates.

Mortgages quote a nominal annual rate together with a compounding
convention. The engine works from a monthly effective rate and compounds it
over each payment period's (possibly fractional) length in months.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Union

from .data_models import CompoundingMethod, coerce_enum
from .payments import period_months
from .utils import Number, to_decimal

Exponent = Union[Fraction, Decimal, int]


def _exponent_to_decimal(exponent: Exponent) -> Decimal:
    if isinstance(exponent, Fraction):
        return Decimal(exponent.numerator) / Decimal(exponent.denominator)
    return Decimal(exponent)


def compound_rate(rate: Decimal, periods: Exponent) -> Decimal:
    """Return the rate equivalent to ``rate`` compounded over ``periods``.

    Applies the identity ``(1 + rate) ** periods - 1``. ``periods`` may be
    fractional (``Fraction(1, 6)``, ``Fraction(6, 13)``). A base of zero or
    less has no real fractional power; the result is then ``-1``, i.e. the
    whole balance is lost each period.
    """
    base = 1 + rate
    if base <= 0:
        return Decimal("-1")
    exponent = _exponent_to_decimal(periods)
    if exponent == 1:
        return rate
    return base ** exponent - 1


def compute_monthly_rate(annual_rate_percent: Number, compounding_method) -> Decimal:
    """Return the monthly effective rate for a quoted annual rate.

    Parameters
    ----------
    annual_rate_percent:
        Nominal annual rate in percent.
    compounding_method: CompoundingMethod or str
        ``monthly`` divides the nominal rate by twelve. ``semi-annual`` treats
        the nominal rate as compounding twice a year and finds the monthly
        rate that compounds to the same semi-annual rate over six months.

    Non-positive rates are not rejected; they produce zero or negative
    monthly rates.
    """
    method = coerce_enum(CompoundingMethod, compounding_method)
    annual = to_decimal(annual_rate_percent) / Decimal(100)
    if method is CompoundingMethod.MONTHLY:
        return annual / Decimal(12)
    semi_annual_rate = annual / Decimal(2)
    return compound_rate(semi_annual_rate, Fraction(1, 6))


def compute_period_rate(monthly_rate: Decimal, frequency) -> Decimal:
    """Compound ``monthly_rate`` over one payment period of ``frequency``."""
    return compound_rate(monthly_rate, period_months(frequency))
