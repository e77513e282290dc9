"""Fold a period-level ledger into one row per year of payments."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from .data_models import AmortizationEntry
from .payments import payments_per_year


def aggregate_annually(ledger: Iterable[AmortizationEntry], frequency) -> List[AmortizationEntry]:
    """Group consecutive blocks of ``payments_per_year(frequency)`` entries.

    Each output row sums payment, principal and interest over its block and
    carries the balance and cumulative totals of the block's last entry. The
    final block may be shorter. ``payment_number`` on the output is the
    1-based year number.
    """
    entries = list(ledger)
    block = payments_per_year(frequency)
    yearly: List[AmortizationEntry] = []
    for start in range(0, len(entries), block):
        window = entries[start:start + block]
        last = window[-1]
        yearly.append(
            AmortizationEntry(
                payment_number=start // block + 1,
                payment=sum((e.payment for e in window), Decimal("0")),
                principal=sum((e.principal for e in window), Decimal("0")),
                interest=sum((e.interest for e in window), Decimal("0")),
                balance=last.balance,
                cumulative_interest=last.cumulative_interest,
                cumulative_principal=last.cumulative_principal,
            )
        )
    return yearly
