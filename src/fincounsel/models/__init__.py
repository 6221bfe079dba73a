"""SQLModel table exports."""

from .analysis import FinancialAnalysis, FinancialGoal, InsurancePolicy
from .client import ChildDependent, Client

__all__ = [
    "ChildDependent",
    "Client",
    "FinancialAnalysis",
    "FinancialGoal",
    "InsurancePolicy",
]
