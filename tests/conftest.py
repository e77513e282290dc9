"""Shared fixtures.

Canonical loan: $750K, 4.5 % quoted with semi-annual compounding, 25-year
amortization, 5-year term, paid monthly.
"""

from decimal import Decimal

import pytest

from mortgage_calc.data_models import LoanSpec


@pytest.fixture
def canonical_spec() -> LoanSpec:
    return LoanSpec(
        principal=Decimal("750000"),
        annual_rate_percent=Decimal("4.5"),
        amortization_years=25,
        payment_frequency="monthly",
        compounding_method="semi-annual",
        term_years=5,
    )


@pytest.fixture
def cents():
    """Tolerance for totals compared against published figures."""
    return Decimal("0.05")
