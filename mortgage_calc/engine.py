"""Core amortization engine for the mortgage calculator.

This module simulates a mortgage payment by payment. Each period accrues
interest at the period rate, applies the regular payment plus any extra
per-payment amount, and adds the annual lump sum in the period that crosses
its due month. The loop stops as soon as the balance is retired, or after
three times the nominal number of payments if it never is.

Two output modes share the same stepping code: ``simulate`` keeps running
totals and returns a ``MortgageResult``; ``simulate_ledger`` records one
``AmortizationEntry`` per period. Because both consume ``_iterate_periods``
their totals agree exactly.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from fractions import Fraction
from typing import Iterator, List, NamedTuple

from .data_models import (
    AmortizationEntry,
    Ledger,
    LoanSpec,
    MortgageResult,
    PeriodStep,
    ScenarioComparison,
    SimulationStatus,
)
from .extras import due_year_bound, is_extra_payment_due
from .payments import (
    monthly_equivalent_payment,
    payments_per_year,
    period_months,
    size_periodic_payment,
)
from .rates import compute_monthly_rate, compute_period_rate

logger = logging.getLogger(__name__)

# Multiple of the nominal payment count after which the loop gives up.
SAFETY_CAP_FACTOR = 3

# Fractional month above which the payoff is reported as the next month.
PAYOFF_ROUND_UP_THRESHOLD = Fraction(99, 100)


class _Plan(NamedTuple):
    """Scalars computed once per simulation."""

    regular_payment: Decimal
    period_rate: Decimal
    period_length: Fraction
    max_periods: int
    opening_balance: Decimal
    due_years: int


class _Period(NamedTuple):
    number: int
    elapsed_months: Fraction
    step: PeriodStep


def _plan(spec: LoanSpec) -> _Plan:
    monthly_rate = compute_monthly_rate(spec.annual_rate_percent, spec.compounding_method)
    monthly_payment = monthly_equivalent_payment(
        spec.principal, monthly_rate, spec.amortization_years
    )
    per_year = payments_per_year(spec.payment_frequency)
    return _Plan(
        regular_payment=size_periodic_payment(monthly_payment, spec.payment_frequency),
        period_rate=compute_period_rate(monthly_rate, spec.payment_frequency),
        period_length=period_months(spec.payment_frequency),
        max_periods=max(0, SAFETY_CAP_FACTOR * spec.amortization_years * per_year),
        opening_balance=spec.principal - spec.one_time_payment,
        due_years=due_year_bound(spec.amortization_years),
    )


def step_period(
    balance: Decimal,
    period_rate: Decimal,
    regular_payment: Decimal,
    extra_per_payment: Decimal = Decimal("0"),
    extra_yearly: Decimal = Decimal("0"),
    yearly_due: bool = False,
) -> PeriodStep:
    """Apply one payment period to ``balance``.

    Interest accrues on the opening balance; everything paid beyond it
    reduces principal. A payment that would overshoot the balance is trimmed
    so the principal portion exactly retires what is left.
    """
    interest = balance * period_rate
    principal = regular_payment - interest + extra_per_payment
    applied = yearly_due and extra_yearly > 0
    if applied:
        principal += extra_yearly
    new_balance = balance - principal
    if new_balance < 0:
        principal = balance
        new_balance = Decimal("0")
    return PeriodStep(
        interest=interest,
        principal=principal,
        balance=new_balance,
        extra_yearly_applied=applied,
    )


def _iterate_periods(spec: LoanSpec, plan: _Plan) -> Iterator[_Period]:
    balance = plan.opening_balance
    number = 0
    while balance > 0 and number < plan.max_periods:
        number += 1
        elapsed = number * plan.period_length
        due = is_extra_payment_due(
            elapsed,
            elapsed - plan.period_length,
            spec.extra_yearly,
            spec.yearly_payment_timing,
            max_years=plan.due_years,
        )
        step = step_period(
            balance,
            plan.period_rate,
            plan.regular_payment,
            spec.extra_per_payment,
            spec.extra_yearly,
            due,
        )
        balance = step.balance
        yield _Period(number, elapsed, step)


def payoff_months(elapsed_months: Fraction) -> int:
    """Whole months reported for an exact elapsed time.

    A fractional part above 0.99 counts as the following month; anything
    else is dropped.
    """
    whole = math.floor(elapsed_months)
    if elapsed_months - whole > PAYOFF_ROUND_UP_THRESHOLD:
        return whole + 1
    return whole


def _status(final_balance: Decimal) -> SimulationStatus:
    if final_balance > 0:
        return SimulationStatus.NOT_CONVERGED
    return SimulationStatus.PAID_OFF


def _log_outcome(spec: LoanSpec, status: SimulationStatus, periods: int, final_balance: Decimal) -> None:
    if status is SimulationStatus.NOT_CONVERGED:
        logger.warning(
            "Mortgage did not pay off within %d %s payments; %s still owed",
            periods,
            spec.payment_frequency.value,
            final_balance,
        )
    else:
        logger.debug("Mortgage paid off after %d payments", periods)


def simulate(spec: LoanSpec) -> MortgageResult:
    """Simulate ``spec`` and return the terminal summary.

    ``term_interest`` and ``term_principal`` accumulate over periods ending
    within the first ``spec.term_years`` years; ``balance_at_term_end`` is
    the balance after the first period that reaches the end of the term (0
    if the loan is retired earlier).
    """
    plan = _plan(spec)
    term_months = Fraction(spec.term_years * 12)
    logger.debug("Simulating %s", spec)

    total_interest = Decimal("0")
    term_interest = Decimal("0")
    term_principal = Decimal("0")
    balance_at_term_end = Decimal("0")
    term_end_seen = False
    balance = plan.opening_balance
    periods = 0
    elapsed = Fraction(0)

    for period in _iterate_periods(spec, plan):
        step = period.step
        periods = period.number
        elapsed = period.elapsed_months
        balance = step.balance
        total_interest += step.interest
        if elapsed <= term_months:
            term_interest += step.interest
            term_principal += step.principal
        if elapsed >= term_months and not term_end_seen:
            balance_at_term_end = step.balance
            term_end_seen = True

    status = _status(balance)
    _log_outcome(spec, status, periods, balance)
    return MortgageResult(
        regular_payment=plan.regular_payment,
        total_payments=periods,
        total_interest=total_interest,
        total_paid=spec.principal + total_interest,
        payoff_months=payoff_months(elapsed),
        term_interest=term_interest,
        term_principal=term_principal,
        balance_at_term_end=balance_at_term_end,
        status=status,
        final_balance=max(balance, Decimal("0")),
    )


def simulate_ledger(spec: LoanSpec) -> Ledger:
    """Simulate ``spec`` and return one ``AmortizationEntry`` per period.

    Cumulative principal starts from the one-time payment made at time zero.
    """
    plan = _plan(spec)
    entries: List[AmortizationEntry] = []
    cumulative_interest = Decimal("0")
    cumulative_principal = spec.one_time_payment
    balance = plan.opening_balance

    for period in _iterate_periods(spec, plan):
        step = period.step
        balance = step.balance
        cumulative_interest += step.interest
        cumulative_principal += step.principal
        entries.append(
            AmortizationEntry(
                payment_number=period.number,
                payment=step.interest + step.principal,
                principal=step.principal,
                interest=step.interest,
                balance=step.balance,
                cumulative_interest=cumulative_interest,
                cumulative_principal=cumulative_principal,
                extra_yearly_applied=step.extra_yearly_applied,
            )
        )

    status = _status(balance)
    _log_outcome(spec, status, len(entries), balance)
    return Ledger(entries=tuple(entries), regular_payment=plan.regular_payment, status=status)


def compare_scenarios(spec: LoanSpec) -> ScenarioComparison:
    """Measure ``spec`` against the same loan without any extra payments."""
    return ScenarioComparison(baseline=simulate(spec.without_extras()), with_extras=simulate(spec))
