"""Blueprint exports."""

from . import analyses, calculators, clients, home

__all__ = [
    "analyses",
    "calculators",
    "clients",
    "home",
]
