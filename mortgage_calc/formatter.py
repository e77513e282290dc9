"""Output helpers for the mortgage calculator.

This module renders summaries, schedules and comparisons as plain text and
converts engine results into JSON-serialisable dictionaries. We rely only on
built-in printing and string formatting; no locale-aware currency formatting
is attempted.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .data_models import AmortizationEntry, MortgageResult, ScenarioComparison
from .payments import frequency_label
from .utils import format_years_months


def result_to_dict(result: MortgageResult) -> Dict[str, Any]:
    return {
        "regular_payment": float(result.regular_payment),
        "total_payments": result.total_payments,
        "total_interest": float(result.total_interest),
        "total_paid": float(result.total_paid),
        "payoff_months": result.payoff_months,
        "term_interest": float(result.term_interest),
        "term_principal": float(result.term_principal),
        "balance_at_term_end": float(result.balance_at_term_end),
        "status": result.status.value,
        "final_balance": float(result.final_balance),
    }


def entry_to_dict(entry: AmortizationEntry) -> Dict[str, Any]:
    return {
        "payment_number": entry.payment_number,
        "payment": float(entry.payment),
        "principal": float(entry.principal),
        "interest": float(entry.interest),
        "balance": float(entry.balance),
        "cumulative_interest": float(entry.cumulative_interest),
        "cumulative_principal": float(entry.cumulative_principal),
    }


def comparison_to_dict(comparison: ScenarioComparison) -> Dict[str, Any]:
    return {
        "baseline": result_to_dict(comparison.baseline),
        "with_extras": result_to_dict(comparison.with_extras),
        "months_saved": comparison.months_saved,
        "interest_saved": float(comparison.interest_saved),
    }


def print_summary(result: MortgageResult, frequency, term_years: int, title: str = "Summary") -> None:
    """Print a summary of mortgage metrics in a human-readable format."""
    label = frequency_label(frequency)
    print(title)
    print("-" * 72)
    print(f"{label + ' payment':27s}: {result.regular_payment:.2f}")
    print(f"{'Payoff':27s}: {format_years_months(result.payoff_months)}")
    print(f"{'Payments made':27s}: {result.total_payments}")
    print(f"{'Total interest':27s}: {result.total_interest:.2f}")
    print(f"{'Total paid':27s}: {result.total_paid:.2f}")
    years_label = f"{term_years} year{'' if term_years == 1 else 's'}"
    print(f"Term details ({years_label})")
    print(f"{'  Interest paid':27s}: {result.term_interest:.2f}")
    print(f"{'  Principal paid':27s}: {result.term_principal:.2f}")
    print(f"{'  Balance at term end':27s}: {result.balance_at_term_end:.2f}")
    if not result.converged:
        print(
            f"WARNING: not paid off after {result.total_payments} payments; "
            f"{result.final_balance:.2f} still owed"
        )
    print("-" * 72)


def print_savings(comparison: ScenarioComparison) -> None:
    print("Savings")
    print("-" * 72)
    print(f"{'Time saved':27s}: {format_years_months(comparison.months_saved)}")
    print(f"{'Interest saved':27s}: {comparison.interest_saved:.2f}")
    print("-" * 72)


def print_schedule(schedule: Iterable[AmortizationEntry], annual: bool = False) -> None:
    """Print the amortization schedule as a simple table.

    Parameters
    ----------
    schedule: Iterable[AmortizationEntry]
        The schedule entries to print.
    annual: bool
        Whether rows are yearly aggregates; only changes the first header.
    """
    headers = [
        "Year" if annual else "Payment#",
        "Payment",
        "Principal",
        "Interest",
        "Balance",
        "CumInterest",
        "CumPrincipal",
    ]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.payment_number),
            f"{entry.payment:.2f}",
            f"{entry.principal:.2f}",
            f"{entry.interest:.2f}",
            f"{entry.balance:.2f}",
            f"{entry.cumulative_interest:.2f}",
            f"{entry.cumulative_principal:.2f}",
        ]
        print("\t".join(row))


def print_frequency_table(rows: Sequence[Tuple[Any, MortgageResult]]) -> None:
    """Print one line per payment frequency for the same loan."""
    print("Frequencies")
    print("=" * 72)
    print(f"{'Frequency':24s} {'Payment':>12s} {'Payoff':>18s} {'Interest':>15s}")
    for frequency, result in rows:
        payoff = format_years_months(result.payoff_months)
        if not result.converged:
            payoff = "not paid off"
        print(
            f"{frequency_label(frequency):24s} {result.regular_payment:12.2f} "
            f"{payoff:>18s} {result.total_interest:15.2f}"
        )
    print("=" * 72)


def schedule_rows(schedule: Iterable[AmortizationEntry]) -> List[List[Any]]:
    """Rows for CSV export, header first."""
    rows: List[List[Any]] = [
        [
            "Payment_Number",
            "Payment",
            "Principal",
            "Interest",
            "Balance",
            "Cumulative_Interest",
            "Cumulative_Principal",
        ]
    ]
    for e in schedule:
        rows.append(
            [
                e.payment_number,
                float(e.payment),
                float(e.principal),
                float(e.interest),
                float(e.balance),
                float(e.cumulative_interest),
                float(e.cumulative_principal),
            ]
        )
    return rows
