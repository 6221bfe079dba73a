"""Life insurance needs estimates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from ..logging_config import get_logger

logger = get_logger(__name__)

# Simplified pricing; real rates vary by insurer.
BASE_RATE_PER_THOUSAND = 0.0012
AGE_FACTOR_PER_YEAR = 0.02
BASELINE_AGE = 25


class CoverageMethod(str, Enum):
    INCOME_REPLACEMENT = "income-replacement"
    NEEDS_ANALYSIS = "needs-analysis"
    DIME = "dime-method"

    @classmethod
    def parse(cls, value: "CoverageMethod | str") -> "CoverageMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown coverage method: {value!r}") from exc


@dataclass(slots=True)
class InsuranceProfile:
    """Household inputs for the coverage calculator."""

    age: float = 35
    annual_income: float = 75000
    existing_coverage: float = 0
    mortgage: float = 300000
    other_debts: float = 50000
    children_count: int = 2
    years_to_support: float = 18
    spouse_income: float = 50000
    emergency_fund_months: float = 6
    education_costs: float = 100000
    final_expenses: float = 15000


@dataclass(frozen=True, slots=True)
class CoverageEstimate:
    coverage: int
    monthly_premium: int
    annual_premium: int
    method: CoverageMethod

    def to_dict(self) -> dict:
        return {
            "coverage": self.coverage,
            "monthly_premium": self.monthly_premium,
            "annual_premium": self.annual_premium,
            "method": self.method.value,
        }


def income_replacement(profile: InsuranceProfile) -> float:
    return profile.annual_income * 10


def needs_analysis(profile: InsuranceProfile) -> float:
    """Total household needs minus existing resources, never negative."""

    total_needs = (
        profile.annual_income * profile.years_to_support
        + profile.mortgage
        + profile.other_debts
        + profile.annual_income * (profile.emergency_fund_months / 12)
        + profile.education_costs
        + profile.final_expenses
    )
    existing = profile.existing_coverage + profile.spouse_income * 5
    return max(0.0, total_needs - existing)


def dime_method(profile: InsuranceProfile) -> float:
    # Debt + Income + Mortgage + Education
    return (
        profile.other_debts
        + profile.annual_income * 5
        + profile.mortgage
        + profile.education_costs
    )


_METHODS = {
    CoverageMethod.INCOME_REPLACEMENT: income_replacement,
    CoverageMethod.NEEDS_ANALYSIS: needs_analysis,
    CoverageMethod.DIME: dime_method,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def monthly_premium(coverage: float, age: float) -> float:
    """Approximate monthly premium for ``coverage`` at ``age``."""

    age_multiplier = 1 + (age - BASELINE_AGE) * AGE_FACTOR_PER_YEAR
    return (coverage / 1000) * BASE_RATE_PER_THOUSAND * age_multiplier


def calculate_coverage(
    profile: InsuranceProfile, method: CoverageMethod | str = CoverageMethod.INCOME_REPLACEMENT
) -> CoverageEstimate:
    """Estimate coverage and premiums using one of the supported methods."""

    method = CoverageMethod.parse(method)
    coverage = _METHODS[method](profile)
    premium = monthly_premium(coverage, profile.age)
    logger.debug("Coverage estimated", extra={"method": method.value, "coverage": coverage})
    return CoverageEstimate(
        coverage=_round_half_up(coverage),
        monthly_premium=_round_half_up(premium),
        annual_premium=_round_half_up(premium * 12),
        method=method,
    )


def compare_methods(profile: InsuranceProfile) -> dict[str, int]:
    """Coverage for every method, keyed by method name."""

    return {method.value: _round_half_up(func(profile)) for method, func in _METHODS.items()}


__all__ = [
    "CoverageEstimate",
    "CoverageMethod",
    "InsuranceProfile",
    "calculate_coverage",
    "compare_methods",
    "monthly_premium",
]
