"""Flask JSON API for the mortgage calculator.

Each request carries one scenario as JSON; nothing is stored between
requests. Input is validated here, before the engine sees it.
"""

import logging

from flask import Flask, jsonify, request

from mortgage_calc.aggregation import aggregate_annually
from mortgage_calc.config import configure_logging, load_settings
from mortgage_calc.data_models import (
    CompoundingMethod,
    LoanSpec,
    PaymentFrequency,
    YearlyPaymentTiming,
    coerce_enum,
)
from mortgage_calc.engine import compare_scenarios, simulate, simulate_ledger
from mortgage_calc.formatter import comparison_to_dict, entry_to_dict, result_to_dict
from mortgage_calc.payments import frequency_label, payments_per_year
from mortgage_calc.utils import to_decimal

logger = logging.getLogger(__name__)

settings = load_settings()
configure_logging(settings)

app = Flask(__name__)
app.secret_key = settings.secret_key


class InvalidScenario(ValueError):
    """Raised when a request body does not describe a usable loan."""


def _number(data: dict, name: str, default=None):
    value = data.get(name, default)
    if value is None:
        raise InvalidScenario(f"Missing field: {name}")
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise InvalidScenario(f"Invalid {name}: {value!r}") from exc


def _integer(data: dict, name: str, default=None) -> int:
    value = _number(data, name, default)
    if value != value.to_integral_value():
        raise InvalidScenario(f"{name} must be a whole number")
    return int(value)


def _form_to_spec(data) -> LoanSpec:
    if not isinstance(data, dict):
        raise InvalidScenario("Request body must be a JSON object")
    principal = _number(data, "principal")
    rate = _number(data, "annual_rate_percent")
    years = _integer(data, "amortization_years")
    if principal <= 0 or rate <= 0 or years <= 0:
        raise InvalidScenario(
            "Please enter valid positive values for loan amount, interest rate, and term."
        )
    extra_payment = _number(data, "extra_per_payment", 0)
    extra_yearly = _number(data, "extra_yearly", 0)
    one_time = _number(data, "one_time_payment", 0)
    if min(extra_payment, extra_yearly, one_time) < 0:
        raise InvalidScenario("Extra payments cannot be negative.")
    if one_time >= principal:
        raise InvalidScenario(
            "One-time payment cannot be greater than or equal to the loan amount."
        )
    try:
        frequency = coerce_enum(PaymentFrequency, data.get("payment_frequency", "monthly"))
        compounding = coerce_enum(CompoundingMethod, data.get("compounding_method", "semi-annual"))
        timing = coerce_enum(YearlyPaymentTiming, data.get("yearly_payment_timing", "start"))
    except ValueError as exc:
        raise InvalidScenario(str(exc)) from exc
    return LoanSpec(
        principal=principal,
        annual_rate_percent=rate,
        amortization_years=years,
        payment_frequency=frequency,
        compounding_method=compounding,
        extra_per_payment=extra_payment,
        extra_yearly=extra_yearly,
        yearly_payment_timing=timing,
        one_time_payment=one_time,
        term_years=_integer(data, "term_years", settings.term_years),
    )


@app.errorhandler(InvalidScenario)
def handle_invalid_scenario(exc):
    logger.info("Rejected scenario: %s", exc)
    return jsonify({"error": str(exc)}), 400


@app.post("/api/summary")
def summary():
    spec = _form_to_spec(request.get_json(silent=True))
    if spec.has_extras:
        comparison = compare_scenarios(spec)
        return jsonify(
            {
                "result": result_to_dict(comparison.with_extras),
                "comparison": comparison_to_dict(comparison),
            }
        )
    return jsonify({"result": result_to_dict(simulate(spec)), "comparison": None})


@app.post("/api/schedule")
def schedule():
    view = request.args.get("view", "payment")
    if view not in ("payment", "annual"):
        raise InvalidScenario(f"Unknown view: {view}")
    spec = _form_to_spec(request.get_json(silent=True))
    ledger = simulate_ledger(spec)
    rows = aggregate_annually(ledger, spec.payment_frequency) if view == "annual" else ledger
    return jsonify(
        {
            "status": ledger.status.value,
            "regular_payment": float(ledger.regular_payment),
            "view": view,
            "schedule": [entry_to_dict(e) for e in rows],
        }
    )


@app.get("/api/frequencies")
def frequencies():
    return jsonify(
        [
            {
                "value": f.value,
                "label": frequency_label(f),
                "payments_per_year": payments_per_year(f),
            }
            for f in PaymentFrequency
        ]
    )


if __name__ == "__main__":
    print("Starting Mortgage Calculator API...")
    app.run(host="0.0.0.0", port=8710, debug=True)
