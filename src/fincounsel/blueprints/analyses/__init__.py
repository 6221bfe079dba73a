"""Financial analyses blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("analyses", __name__, url_prefix="/analyses")

from . import routes  # noqa: E402,F401

__all__ = ["bp"]
