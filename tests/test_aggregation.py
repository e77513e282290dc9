from decimal import Decimal

from mortgage_calc.aggregation import aggregate_annually
from mortgage_calc.engine import simulate_ledger

TOLERANCE = Decimal("0.000001")


class TestAggregateAnnually:
    def test_monthly_schedule_has_one_row_per_year(self, canonical_spec):
        ledger = simulate_ledger(canonical_spec)
        yearly = aggregate_annually(ledger, "monthly")
        assert len(yearly) == 25
        assert [row.payment_number for row in yearly] == list(range(1, 26))
        assert yearly[-1].balance == 0

    def test_rows_sum_their_window(self, canonical_spec):
        ledger = simulate_ledger(canonical_spec)
        first = aggregate_annually(ledger, "monthly")[0]
        window = ledger[:12]
        assert first.payment == sum((e.payment for e in window), Decimal("0"))
        assert first.principal == sum((e.principal for e in window), Decimal("0"))
        assert first.interest == sum((e.interest for e in window), Decimal("0"))
        assert first.balance == window[-1].balance
        assert first.cumulative_interest == window[-1].cumulative_interest
        assert first.cumulative_principal == window[-1].cumulative_principal

    def test_last_window_may_be_short(self, canonical_spec):
        spec = canonical_spec.with_changes(payment_frequency="bi-weekly")
        ledger = simulate_ledger(spec)
        yearly = aggregate_annually(ledger, spec.payment_frequency)
        full, rest = divmod(len(ledger), 26)
        assert len(yearly) == full + (1 if rest else 0)
        assert yearly[-1].cumulative_interest == ledger[-1].cumulative_interest

    def test_totals_are_preserved(self, canonical_spec):
        spec = canonical_spec.with_changes(payment_frequency="weekly", extra_yearly=10000)
        ledger = simulate_ledger(spec)
        yearly = aggregate_annually(ledger, "weekly")
        assert abs(sum((r.interest for r in yearly), Decimal("0")) - ledger[-1].cumulative_interest) < TOLERANCE
        assert abs(sum((r.principal for r in yearly), Decimal("0")) - sum((e.principal for e in ledger), Decimal("0"))) < TOLERANCE

    def test_accepts_a_plain_list(self, canonical_spec):
        entries = list(simulate_ledger(canonical_spec))
        assert len(aggregate_annually(entries[:30], "monthly")) == 3

    def test_empty_ledger(self):
        assert aggregate_annually([], "weekly") == []
