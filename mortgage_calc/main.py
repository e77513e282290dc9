"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can view a scenario summary (with savings against the plain
loan when extra payments are set), print or export the amortization schedule,
and compare every payment frequency for the same loan.
"""

from __future__ import annotations

import csv
import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click

from .aggregation import aggregate_annually
from .config import configure_logging, load_settings
from .data_models import (
    CompoundingMethod,
    LoanSpec,
    PaymentFrequency,
    YearlyPaymentTiming,
)
from .engine import compare_scenarios, simulate, simulate_ledger
from .formatter import (
    comparison_to_dict,
    entry_to_dict,
    print_frequency_table,
    print_savings,
    print_schedule,
    print_summary,
    result_to_dict,
    schedule_rows,
)
from .utils import to_decimal


def parse_amount(value: str) -> Decimal:
    """Parse a money amount with optional suffixes.

    Accepts plain numbers ("500000", "750,000") and shorthand with ``k``/``m``
    suffixes (e.g. "750k" meaning 750_000).
    """
    value = value.strip().lower().replace(",", "")
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return to_decimal(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def parse_rate(value: str) -> Decimal:
    """Parse an annual rate given in percent ("4.5" or "4.5%")."""
    value = value.strip()
    if value.endswith("%"):
        value = value[:-1]
    try:
        return to_decimal(value)
    except ValueError:
        raise click.BadParameter(f"Invalid rate: {value}")


def _amount_callback(ctx, param, value):
    if value is None:
        return None
    return parse_amount(value)


def _rate_callback(ctx, param, value):
    return parse_rate(value)


def loan_options(func: Callable) -> Callable:
    """Attach the options describing a loan scenario to a command."""
    options = [
        click.option("--principal", "-p", required=True, callback=_amount_callback, help="Loan amount (e.g. 750000, 750k)"),
        click.option("--rate", "-r", required=True, callback=_rate_callback, help="Annual interest rate (percent)"),
        click.option("--years", "-y", required=True, type=int, help="Amortization period in years"),
        click.option(
            "--frequency",
            "-f",
            type=click.Choice([f.value for f in PaymentFrequency]),
            default=PaymentFrequency.MONTHLY.value,
            show_default=True,
            help="Payment frequency",
        ),
        click.option(
            "--compounding",
            "-c",
            type=click.Choice([m.value for m in CompoundingMethod]),
            default=CompoundingMethod.SEMI_ANNUAL.value,
            show_default=True,
            help="Compounding convention of the quoted rate",
        ),
        click.option("--term-years", type=int, default=None, help="Rate term in years (defaults to MORTGAGE_CALC_TERM_YEARS or 5)"),
        click.option("--extra-payment", default="0", callback=_amount_callback, help="Extra amount added to every payment"),
        click.option("--extra-yearly", default="0", callback=_amount_callback, help="Extra lump sum paid once a year"),
        click.option(
            "--yearly-timing",
            type=click.Choice([t.value for t in YearlyPaymentTiming]),
            default=YearlyPaymentTiming.START.value,
            show_default=True,
            help="When in the year the lump sum is paid",
        ),
        click.option("--one-time", default="0", callback=_amount_callback, help="One-time payment made up front"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_spec_from_options(
    principal: Decimal,
    rate: Decimal,
    years: int,
    frequency: str,
    compounding: str,
    term_years: Optional[int],
    extra_payment: Decimal,
    extra_yearly: Decimal,
    yearly_timing: str,
    one_time: Decimal,
    default_term_years: int = 5,
) -> LoanSpec:
    if principal <= 0:
        raise click.BadParameter("Principal must be positive", param_hint="--principal")
    if rate <= 0:
        raise click.BadParameter("Rate must be positive", param_hint="--rate")
    if years <= 0:
        raise click.BadParameter("Amortization period must be positive", param_hint="--years")
    for name, amount in (
        ("--extra-payment", extra_payment),
        ("--extra-yearly", extra_yearly),
        ("--one-time", one_time),
    ):
        if amount < 0:
            raise click.BadParameter("Amount cannot be negative", param_hint=name)
    if one_time >= principal:
        raise click.BadParameter(
            "One-time payment must be less than the loan amount", param_hint="--one-time"
        )
    return LoanSpec(
        principal=principal,
        annual_rate_percent=rate,
        amortization_years=years,
        payment_frequency=frequency,
        compounding_method=compounding,
        extra_per_payment=extra_payment,
        extra_yearly=extra_yearly,
        yearly_payment_timing=yearly_timing,
        one_time_payment=one_time,
        term_years=term_years if term_years is not None else default_term_years,
    )


def _spec_from_context(ctx: click.Context, options: Dict[str, Any]) -> LoanSpec:
    settings = ctx.obj["settings"]
    return build_spec_from_options(default_term_years=settings.term_years, **options)


def export_to_json(path: Path, data: Dict[str, Any]) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule) -> None:
    """Export schedule to a CSV file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerows(schedule_rows(schedule))


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Mortgage amortization calculator."""
    settings = load_settings()
    configure_logging(settings)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
@click.pass_context
def summary(ctx: click.Context, output: Optional[str], **options: Any) -> None:
    """Compute and print the summary for a mortgage."""
    spec = _spec_from_context(ctx, options)
    comparison = compare_scenarios(spec) if spec.has_extras else None
    result = comparison.with_extras if comparison else simulate(spec)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        export_to_json(
            path,
            {
                "summary": result_to_dict(result),
                "comparison": comparison_to_dict(comparison) if comparison else None,
            },
        )
        click.echo(f"Summary exported to {path}")
        return
    if comparison:
        print_summary(comparison.baseline, spec.payment_frequency, spec.term_years, title="Without extra payments")
        print_summary(result, spec.payment_frequency, spec.term_years, title="With extra payments")
        print_savings(comparison)
    else:
        print_summary(result, spec.payment_frequency, spec.term_years)


@cli.command()
@loan_options
@click.option(
    "--view",
    type=click.Choice(["payment", "annual"]),
    default="payment",
    show_default=True,
    help="One row per payment or one row per year",
)
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_context
def schedule(ctx: click.Context, view: str, output: Optional[str], **options: Any) -> None:
    """Compute and print the amortization schedule."""
    spec = _spec_from_context(ctx, options)
    ledger = simulate_ledger(spec)
    rows = list(ledger)
    if view == "annual":
        rows = aggregate_annually(ledger, spec.payment_frequency)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(
                path,
                {
                    "status": ledger.status.value,
                    "regular_payment": float(ledger.regular_payment),
                    "view": view,
                    "schedule": [entry_to_dict(e) for e in rows],
                },
            )
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, rows)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
        return
    if not ledger.converged:
        click.echo("WARNING: the mortgage is not paid off within the safety limit.")
    max_rows = ctx.obj["settings"].max_rows
    if len(rows) > max_rows:
        click.echo(f"Schedule has {len(rows)} rows; showing first {max_rows} rows.")
        rows = rows[:max_rows]
    print_schedule(rows, annual=view == "annual")


@cli.command()
@loan_options
@click.pass_context
def frequencies(ctx: click.Context, **options: Any) -> None:
    """Compare every payment frequency for the same loan."""
    spec = _spec_from_context(ctx, options)
    rows = [(frequency, simulate(spec.with_changes(payment_frequency=frequency))) for frequency in PaymentFrequency]
    print_frequency_table(rows)


if __name__ == "__main__":
    cli()
