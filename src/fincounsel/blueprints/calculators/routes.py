"""Debt payoff and life insurance calculator routes."""

from __future__ import annotations

from flask import Response, jsonify, request
from pydantic import ValidationError

from ...services import reports
from ...services.debts import compare_strategies, simulate
from ...services.insurance import calculate_coverage, compare_methods
from ..common import validation_error_response
from . import bp
from .forms import DebtCalculatorForm, InsuranceForm


def _debt_form() -> DebtCalculatorForm:
    return DebtCalculatorForm.model_validate(request.get_json(silent=True) or {})


def _no_debts():
    return jsonify({"error": "no_debts", "message": "Add at least one debt to calculate."}), 400


@bp.get("/debt-payoff")
def debt_payoff_defaults():
    """Return the calculator's starting inputs."""

    form = DebtCalculatorForm()
    return jsonify(
        {
            "debts": [debt.to_dict() for debt in form.to_debts()],
            "extra_payment": float(form.extra_payment),
            "strategy": form.strategy.value,
        }
    )


@bp.post("/debt-payoff")
def debt_payoff():
    """Simulate a payoff plan for the submitted debts."""

    try:
        form = _debt_form()
    except ValidationError as exc:
        return validation_error_response(exc)

    debts = form.to_debts()
    result = simulate(debts, form.extra_payment, form.strategy)
    if result is None:
        return _no_debts()

    payload = result.to_dict()
    payload["debts"] = [debt.to_dict() for debt in debts]
    return jsonify(payload)


@bp.post("/debt-payoff/compare")
def debt_payoff_compare():
    """Run avalanche and snowball over the same debts."""

    try:
        form = _debt_form()
    except ValidationError as exc:
        return validation_error_response(exc)

    comparison = compare_strategies(debts=form.to_debts(), extra_payment=form.extra_payment)
    if comparison is None:
        return _no_debts()
    return jsonify(comparison.to_dict())


@bp.post("/debt-payoff/chart")
def debt_payoff_chart():
    """Render the payoff progress line chart as PNG."""

    try:
        form = _debt_form()
    except ValidationError as exc:
        return validation_error_response(exc)

    result = simulate(form.to_debts(), form.extra_payment, form.strategy)
    if result is None:
        return _no_debts()

    figure = reports.build_payoff_chart(result)
    return Response(reports.figure_to_png(figure), mimetype="image/png")


@bp.get("/life-insurance")
def life_insurance_defaults():
    return jsonify(InsuranceForm().model_dump(mode="json"))


@bp.post("/life-insurance")
def life_insurance():
    """Estimate coverage with the chosen method and list the alternatives."""

    try:
        form = InsuranceForm.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return validation_error_response(exc)

    profile = form.to_profile()
    estimate = calculate_coverage(profile, form.method)
    payload = estimate.to_dict()
    payload["comparison"] = compare_methods(profile)
    return jsonify(payload)
