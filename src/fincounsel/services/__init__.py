"""Service module exports."""

from . import debts, import_csv, insurance, metrics, reports, seed

__all__ = [
    "debts",
    "import_csv",
    "insurance",
    "metrics",
    "reports",
    "seed",
]
