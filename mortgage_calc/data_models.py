"""Data models for the mortgage calculator.

This module defines the enums describing payment frequencies, compounding
conventions and the timing of annual lump-sum payments, together with the
dataclasses exchanged with the engine: the immutable scenario input
(``LoanSpec``), the terminal summary (``MortgageResult``) and the per-period
ledger rows (``AmortizationEntry``). Every dataclass is frozen so a result can
never be mutated after the engine hands it out.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterator, Tuple

from .utils import to_decimal


class PaymentFrequency(str, Enum):
    """How often the borrower pays.

    The accelerated variants share the period length of their regular
    counterpart and differ only in how the payment amount is sized.
    """

    MONTHLY = "monthly"
    SEMI_MONTHLY = "semi-monthly"
    BI_WEEKLY = "bi-weekly"
    ACCELERATED_BI_WEEKLY = "accelerated-bi-weekly"
    WEEKLY = "weekly"
    ACCELERATED_WEEKLY = "accelerated-weekly"


class CompoundingMethod(str, Enum):
    SEMI_ANNUAL = "semi-annual"  # Canadian statutory convention
    MONTHLY = "monthly"


class YearlyPaymentTiming(str, Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"


class SimulationStatus(str, Enum):
    PAID_OFF = "paid_off"
    NOT_CONVERGED = "not_converged"


def coerce_enum(enum_cls, value):
    """Return ``value`` as a member of ``enum_cls``.

    Accepts either a member or its string value. Unknown values raise
    ``ValueError``.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(
            f"Unsupported {enum_cls.__name__} value {value!r}; expected one of: {allowed}"
        ) from exc


@dataclass(frozen=True)
class LoanSpec:
    """Immutable input describing one mortgage scenario.

    Attributes
    ----------
    principal: Decimal
        The amount borrowed.
    annual_rate_percent: Decimal
        Nominal annual rate in percent (``4.5`` means 4.5 %).
    amortization_years: int
        Years over which the loan is scheduled to be fully repaid.
    payment_frequency: PaymentFrequency
    compounding_method: CompoundingMethod
    extra_per_payment: Decimal
        Added to the principal portion of every regular payment.
    extra_yearly: Decimal
        Lump sum applied once a year at ``yearly_payment_timing``.
    yearly_payment_timing: YearlyPaymentTiming
    one_time_payment: Decimal
        Applied against the principal at time zero.
    term_years: int
        Length of the rate term used for the term-window figures of
        ``MortgageResult``.

    Numeric fields accept ints, floats and strings; they are stored as
    ``Decimal``. Enum fields accept their string values.
    """

    principal: Decimal
    annual_rate_percent: Decimal
    amortization_years: int
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    compounding_method: CompoundingMethod = CompoundingMethod.SEMI_ANNUAL
    extra_per_payment: Decimal = Decimal("0")
    extra_yearly: Decimal = Decimal("0")
    yearly_payment_timing: YearlyPaymentTiming = YearlyPaymentTiming.START
    one_time_payment: Decimal = Decimal("0")
    term_years: int = 5

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        for name in (
            "principal",
            "annual_rate_percent",
            "extra_per_payment",
            "extra_yearly",
            "one_time_payment",
        ):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        object.__setattr__(self, "amortization_years", int(self.amortization_years))
        object.__setattr__(self, "term_years", int(self.term_years))
        object.__setattr__(
            self, "payment_frequency", coerce_enum(PaymentFrequency, self.payment_frequency)
        )
        object.__setattr__(
            self, "compounding_method", coerce_enum(CompoundingMethod, self.compounding_method)
        )
        object.__setattr__(
            self,
            "yearly_payment_timing",
            coerce_enum(YearlyPaymentTiming, self.yearly_payment_timing),
        )

    @property
    def has_extras(self) -> bool:
        return (
            self.extra_per_payment > 0
            or self.extra_yearly > 0
            or self.one_time_payment > 0
        )

    def with_changes(self, **changes) -> "LoanSpec":
        """Return a copy of this spec with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    def without_extras(self) -> "LoanSpec":
        return self.with_changes(
            extra_per_payment=Decimal("0"),
            extra_yearly=Decimal("0"),
            one_time_payment=Decimal("0"),
        )


@dataclass(frozen=True)
class MortgageResult:
    """Terminal summary of a simulated mortgage.

    ``term_interest``, ``term_principal`` and ``balance_at_term_end`` are
    restricted to the first ``LoanSpec.term_years`` years. When ``status`` is
    ``NOT_CONVERGED`` the safety cap stopped the loop and ``final_balance``
    holds what was still owed.
    """

    regular_payment: Decimal
    total_payments: int
    total_interest: Decimal
    total_paid: Decimal
    payoff_months: int
    term_interest: Decimal
    term_principal: Decimal
    balance_at_term_end: Decimal
    status: SimulationStatus = SimulationStatus.PAID_OFF
    final_balance: Decimal = Decimal("0")

    @property
    def converged(self) -> bool:
        return self.status is SimulationStatus.PAID_OFF


@dataclass(frozen=True)
class AmortizationEntry:
    """One row of the amortization ledger.

    For period-level rows ``payment_number`` is the 1-based payment sequence;
    for rows produced by the annual aggregator it is the 1-based year number.
    ``payment`` is always ``interest + principal`` and ``balance`` is never
    negative.
    """

    payment_number: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal
    extra_yearly_applied: bool = False


@dataclass(frozen=True)
class PeriodStep:
    """What a single payment period did to the loan."""

    interest: Decimal
    principal: Decimal
    balance: Decimal
    extra_yearly_applied: bool


@dataclass(frozen=True)
class Ledger:
    """Period-level schedule produced by the ledger mode of the simulator.

    Iterating a ledger yields its entries, so it can be handed straight to the
    annual aggregator.
    """

    entries: Tuple[AmortizationEntry, ...]
    regular_payment: Decimal
    status: SimulationStatus = SimulationStatus.PAID_OFF

    @property
    def converged(self) -> bool:
        return self.status is SimulationStatus.PAID_OFF

    def __iter__(self) -> Iterator[AmortizationEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index):
        return self.entries[index]


@dataclass(frozen=True)
class ScenarioComparison:
    """A scenario with extra payments measured against its plain baseline."""

    baseline: MortgageResult
    with_extras: MortgageResult
    months_saved: int = field(init=False)
    interest_saved: Decimal = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "months_saved", self.baseline.payoff_months - self.with_extras.payoff_months
        )
        object.__setattr__(
            self,
            "interest_saved",
            self.baseline.total_interest - self.with_extras.total_interest,
        )
