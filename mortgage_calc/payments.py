"""Payment sizing.

The loan is always amortized as if it were paid monthly: the annuity formula
fixes a monthly-equivalent payment, and each payment frequency then repackages
that amount into its own periodic payment. Accelerated frequencies keep the
semi-monthly/weekly bite but take it more often, which is what shortens the
payoff.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Callable, Dict, Tuple

from .data_models import PaymentFrequency, coerce_enum
from .utils import Number, ceil_cents, round_cents, to_decimal

# Rates this close to zero make the annuity denominator vanish.
ZERO_RATE_EPSILON = Decimal("1e-12")

PAYMENTS_PER_YEAR: Dict[PaymentFrequency, int] = {
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.SEMI_MONTHLY: 24,
    PaymentFrequency.BI_WEEKLY: 26,
    PaymentFrequency.ACCELERATED_BI_WEEKLY: 26,
    PaymentFrequency.WEEKLY: 52,
    PaymentFrequency.ACCELERATED_WEEKLY: 52,
}

FREQUENCY_LABELS: Dict[PaymentFrequency, str] = {
    PaymentFrequency.MONTHLY: "Monthly",
    PaymentFrequency.SEMI_MONTHLY: "Semi-Monthly",
    PaymentFrequency.BI_WEEKLY: "Bi-Weekly",
    PaymentFrequency.ACCELERATED_BI_WEEKLY: "Accelerated Bi-Weekly",
    PaymentFrequency.WEEKLY: "Weekly",
    PaymentFrequency.ACCELERATED_WEEKLY: "Accelerated Weekly",
}

# (multiplier, divisor, rounding) applied to the monthly-equivalent payment.
# Semi-monthly and weekly round up to match the lender's published amounts.
_SIZING_RULES: Dict[PaymentFrequency, Tuple[int, int, Callable[[Decimal], Decimal]]] = {
    PaymentFrequency.MONTHLY: (1, 1, round_cents),
    PaymentFrequency.SEMI_MONTHLY: (1, 2, ceil_cents),
    PaymentFrequency.BI_WEEKLY: (12, 26, round_cents),
    PaymentFrequency.ACCELERATED_BI_WEEKLY: (1, 2, round_cents),
    PaymentFrequency.WEEKLY: (12, 52, ceil_cents),
    PaymentFrequency.ACCELERATED_WEEKLY: (1, 4, round_cents),
}


def payments_per_year(frequency) -> int:
    """Return the nominal number of payments per year for ``frequency``."""
    return PAYMENTS_PER_YEAR[coerce_enum(PaymentFrequency, frequency)]


def period_months(frequency) -> Fraction:
    """Return the exact length of one payment period in months."""
    return Fraction(12, payments_per_year(frequency))


def frequency_label(frequency) -> str:
    return FREQUENCY_LABELS[coerce_enum(PaymentFrequency, frequency)]


def monthly_equivalent_payment(principal: Number, monthly_rate: Decimal, amortization_years: int) -> Decimal:
    """Return the unrounded fixed monthly payment that retires ``principal``.

    The formula is:

        payment = P * (r * (1 + r)^n) / ((1 + r)^n - 1)

    where ``P`` is the principal, ``r`` the monthly rate and ``n`` the number
    of monthly payments. When the rate is (nearly) zero the payment
    simplifies to ``P / n``. A non-positive ``n`` gives a zero payment.
    """
    principal = to_decimal(principal)
    n = int(amortization_years) * 12
    if n <= 0:
        return Decimal("0")
    if abs(monthly_rate) < ZERO_RATE_EPSILON:
        return principal / Decimal(n)
    factor = (1 + monthly_rate) ** n
    if factor == 1:
        return principal / Decimal(n)
    return principal * (monthly_rate * factor) / (factor - 1)


def size_periodic_payment(monthly_payment: Number, frequency) -> Decimal:
    """Convert a monthly-equivalent payment into the payment for ``frequency``.

    The result is rounded to whole cents: up for semi-monthly and weekly,
    to the nearest cent otherwise.
    """
    multiplier, divisor, rounding = _SIZING_RULES[coerce_enum(PaymentFrequency, frequency)]
    amount = to_decimal(monthly_payment) * multiplier / divisor
    return rounding(amount)
