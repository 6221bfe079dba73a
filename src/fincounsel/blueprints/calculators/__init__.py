"""Calculators blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("calculators", __name__, url_prefix="/calculators")

from . import routes  # noqa: E402,F401

__all__ = ["bp"]
