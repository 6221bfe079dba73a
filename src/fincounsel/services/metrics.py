"""Financial metrics derived from an analysis ledger."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Mapping

INCOME_FIELDS = ("primary_income", "spouse_income", "other_income")
EXPENSE_FIELDS = (
    "housing",
    "transportation",
    "food",
    "healthcare",
    "insurance",
    "utilities",
    "entertainment",
    "other_expenses",
)
ASSET_FIELDS = ("cash", "investments", "retirement", "real_estate", "personal_property")
LIABILITY_FIELDS = ("mortgage", "credit_cards", "loans", "other_liabilities")

LEDGER_SECTIONS: Mapping[str, tuple[str, ...]] = {
    "income": INCOME_FIELDS,
    "expenses": EXPENSE_FIELDS,
    "assets": ASSET_FIELDS,
    "liabilities": LIABILITY_FIELDS,
}


@dataclass(slots=True)
class FinancialMetrics:
    """Totals and ratios shown on the analysis summary and the PDF report."""

    total_income: float
    total_expenses: float
    total_assets: float
    total_liabilities: float
    net_income: float
    net_worth: float
    debt_to_asset_ratio: float
    savings_rate: float
    monthly_net_income: float
    total_coverage: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {key: round(value, 2) for key, value in asdict(self).items()}


def _number(value: Any) -> float:
    """Treat missing or non-numeric ledger values as zero."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _read(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def section_total(source: Any, section: str) -> float:
    """Sum one ledger section (income, expenses, assets or liabilities)."""

    fields = LEDGER_SECTIONS[section]
    return sum(_number(_read(source, name)) for name in fields)


def section_breakdown(source: Any, section: str) -> dict[str, float]:
    """Return the non-total line items of a ledger section."""

    return {name: _number(_read(source, name)) for name in LEDGER_SECTIONS[section]}


def compute_metrics(analysis: Any, *, policies: Iterable[Any] = ()) -> FinancialMetrics:
    """Aggregate an analysis (model instance or mapping) into report metrics."""

    total_income = section_total(analysis, "income")
    total_expenses = section_total(analysis, "expenses")
    total_assets = section_total(analysis, "assets")
    total_liabilities = section_total(analysis, "liabilities")

    net_income = total_income - total_expenses
    net_worth = total_assets - total_liabilities
    debt_to_asset = (total_liabilities / total_assets) * 100 if total_assets > 0 else 0.0
    savings_rate = (net_income / total_income) * 100 if total_income > 0 else 0.0
    coverage = sum(_number(_read(policy, "coverage_amount")) for policy in policies)

    return FinancialMetrics(
        total_income=total_income,
        total_expenses=total_expenses,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_income=net_income,
        net_worth=net_worth,
        debt_to_asset_ratio=debt_to_asset,
        savings_rate=savings_rate,
        monthly_net_income=net_income / 12,
        total_coverage=coverage,
    )


def goal_progress(current_amount: Any, target_amount: Any) -> float:
    """Percent of a goal reached, capped at 100."""

    target = _number(target_amount)
    if target <= 0:
        return 0.0
    return min(_number(current_amount) / target * 100, 100.0)


__all__ = [
    "ASSET_FIELDS",
    "EXPENSE_FIELDS",
    "FinancialMetrics",
    "INCOME_FIELDS",
    "LEDGER_SECTIONS",
    "LIABILITY_FIELDS",
    "compute_metrics",
    "goal_progress",
    "section_breakdown",
    "section_total",
]
