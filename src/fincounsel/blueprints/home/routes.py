"""Home routes."""

from __future__ import annotations

from flask import current_app, jsonify, url_for
from sqlalchemy import text

from ...extensions import session_scope
from . import bp


@bp.get("/")
def index():
    """List the service's main endpoints."""

    return jsonify(
        {
            "name": current_app.config.get("APP_NAME", "FinCounsel"),
            "endpoints": {
                "clients": url_for("clients.list_clients"),
                "analyses": url_for("analyses.list_analyses"),
                "debt_payoff": url_for("calculators.debt_payoff_defaults"),
                "life_insurance": url_for("calculators.life_insurance_defaults"),
                "health": url_for("home.health"),
            },
        }
    )


@bp.get("/health")
def health():
    """Liveness check that also pings the database."""

    with session_scope() as session:
        session.execute(text("SELECT 1"))
    return jsonify({"status": "ok"})
