"""Financial analysis routes."""

from __future__ import annotations

from io import BytesIO
from typing import Iterable

from flask import jsonify, request, send_file
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from ...logging_config import get_logger
from ...models.analysis import FinancialAnalysis, FinancialGoal, InsurancePolicy
from ...services import reports
from ...services.metrics import compute_metrics, goal_progress, section_breakdown
from ..common import (
    analysis_repository,
    client_repository,
    not_found,
    validation_error_response,
)
from . import bp
from .forms import AnalysisCreate, AnalysisUpdate

logger = get_logger(__name__)

_TOTAL_KEYS = {
    "income": "total_income",
    "expenses": "total_expenses",
    "assets": "total_assets",
    "liabilities": "total_liabilities",
}


def serialize_goal(goal: FinancialGoal) -> dict:
    data = goal.model_dump(mode="json")
    data["progress"] = round(goal_progress(goal.current_amount, goal.target_amount), 1)
    return data


def serialize_analysis(
    analysis: FinancialAnalysis,
    goals: Iterable[FinancialGoal] = (),
    policies: Iterable[InsurancePolicy] = (),
) -> dict:
    policies = list(policies)
    metrics = compute_metrics(analysis, policies=policies)
    metric_values = metrics.to_dict()

    data: dict = {
        "id": analysis.id,
        "client_id": analysis.client_id,
        "notes": analysis.notes,
        "created_at": analysis.created_at.isoformat(),
        "updated_at": analysis.updated_at.isoformat(),
    }
    for section, total_key in _TOTAL_KEYS.items():
        entries = section_breakdown(analysis, section)
        entries[total_key] = metric_values[total_key]
        data[section] = entries
    data["goals"] = [serialize_goal(goal) for goal in goals]
    data["policies"] = [policy.model_dump(mode="json") for policy in policies]
    data["metrics"] = metric_values
    return data


def _load(analysis_id: int):
    repo = analysis_repository()
    analysis = repo.get_by_id(analysis_id)
    if analysis is None:
        return repo, None, [], []
    return repo, analysis, repo.list_goals(analysis_id), repo.list_policies(analysis_id)


def _analysis_exists(client_id: int):
    return jsonify({"error": "analysis_exists", "client_id": client_id}), 409


@bp.get("/")
def list_analyses():
    """List analyses, optionally for a single ``?client_id=``."""

    repo = analysis_repository()
    client_id = request.args.get("client_id", type=int)
    if client_id is not None:
        found = repo.get_for_client(client_id)
        analyses = [found] if found is not None else []
    else:
        analyses = repo.list_all()
    return jsonify(
        [
            serialize_analysis(a, repo.list_goals(a.id), repo.list_policies(a.id))
            for a in analyses
        ]
    )


@bp.post("/")
def create_analysis():
    try:
        payload = AnalysisCreate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return validation_error_response(exc)

    if client_repository().get_by_id(payload.client_id) is None:
        return not_found("client", payload.client_id)

    repo = analysis_repository()
    if repo.get_for_client(payload.client_id) is not None:
        return _analysis_exists(payload.client_id)

    try:
        analysis = repo.create(
            payload.to_model(),
            goals=payload.goal_models() or [],
            policies=payload.policy_models() or [],
        )
    except IntegrityError:
        # Another request created the analysis after the lookup above.
        logger.info("Concurrent analysis create", extra={"client_id": payload.client_id})
        return _analysis_exists(payload.client_id)
    return (
        jsonify(
            serialize_analysis(
                analysis, repo.list_goals(analysis.id), repo.list_policies(analysis.id)
            )
        ),
        201,
    )


@bp.get("/<int:analysis_id>")
def get_analysis(analysis_id: int):
    _, analysis, goals, policies = _load(analysis_id)
    if analysis is None:
        return not_found("analysis", analysis_id)
    return jsonify(serialize_analysis(analysis, goals, policies))


@bp.put("/<int:analysis_id>")
def update_analysis(analysis_id: int):
    try:
        payload = AnalysisUpdate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return validation_error_response(exc)

    repo = analysis_repository()
    analysis = repo.update(
        analysis_id,
        payload.changes(),
        goals=payload.goal_models(),
        policies=payload.policy_models(),
    )
    if analysis is None:
        return not_found("analysis", analysis_id)
    return jsonify(
        serialize_analysis(analysis, repo.list_goals(analysis_id), repo.list_policies(analysis_id))
    )


@bp.delete("/<int:analysis_id>")
def delete_analysis(analysis_id: int):
    if not analysis_repository().delete(analysis_id):
        return not_found("analysis", analysis_id)
    return "", 204


@bp.get("/<int:analysis_id>/metrics")
def analysis_metrics(analysis_id: int):
    _, analysis, _, policies = _load(analysis_id)
    if analysis is None:
        return not_found("analysis", analysis_id)
    return jsonify(compute_metrics(analysis, policies=policies).to_dict())


@bp.get("/<int:analysis_id>/report.pdf")
def analysis_report(analysis_id: int):
    """Download the client's financial analysis report as PDF."""

    _, analysis, goals, policies = _load(analysis_id)
    if analysis is None:
        return not_found("analysis", analysis_id)
    client = client_repository().get_by_id(analysis.client_id)
    if client is None:
        return not_found("client", analysis.client_id)

    buffer = BytesIO()
    reports.build_pdf_report(
        client=client, analysis=analysis, goals=goals, policies=policies, output=buffer
    )
    buffer.seek(0)
    filename = f"financial-analysis-{client.last_name.lower() or client.id}.pdf"
    return send_file(
        buffer, mimetype="application/pdf", as_attachment=True, download_name=filename
    )
