"""Helpers shared by the JSON blueprints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Optional

from flask import jsonify
from pydantic import BeforeValidator, ValidationError

from ..domain.repositories import AnalysisRepository, ClientRepository
from ..extensions import session_factory
from ..infra.repositories import SQLModelAnalysisRepository, SQLModelClientRepository


def coerce_decimal(value: Any) -> Decimal:
    """Blank or non-numeric form input counts as zero."""

    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        amount = Decimal(str(value).strip().replace(",", "") or "0")
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return amount


def coerce_float(value: Any) -> float:
    return float(coerce_decimal(value))


def coerce_optional_date(value: Any) -> Optional[date | str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


Amount = Annotated[float, BeforeValidator(coerce_float)]
DecimalAmount = Annotated[Decimal, BeforeValidator(coerce_decimal)]
OptionalDate = Annotated[Optional[date], BeforeValidator(coerce_optional_date)]


def validation_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by their top-level field."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = ".".join(str(part) for part in loc) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


def validation_error_response(exc: ValidationError):
    return jsonify({"error": "validation_error", "fields": validation_errors(exc)}), 400


def not_found(resource: str, resource_id: int):
    return jsonify({"error": "not_found", "resource": resource, "id": resource_id}), 404


def client_repository() -> ClientRepository:
    return SQLModelClientRepository(session_factory())


def analysis_repository() -> AnalysisRepository:
    return SQLModelAnalysisRepository(session_factory())


def isoformat(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None
