"""Financial analysis payloads."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.analysis import FinancialAnalysis, FinancialGoal, InsurancePolicy
from ..common import Amount, OptionalDate


class IncomeSection(BaseModel):
    primary_income: Amount = 0.0
    spouse_income: Amount = 0.0
    other_income: Amount = 0.0


class ExpenseSection(BaseModel):
    housing: Amount = 0.0
    transportation: Amount = 0.0
    food: Amount = 0.0
    healthcare: Amount = 0.0
    insurance: Amount = 0.0
    utilities: Amount = 0.0
    entertainment: Amount = 0.0
    other_expenses: Amount = 0.0


class AssetSection(BaseModel):
    cash: Amount = 0.0
    investments: Amount = 0.0
    retirement: Amount = 0.0
    real_estate: Amount = 0.0
    personal_property: Amount = 0.0


class LiabilitySection(BaseModel):
    mortgage: Amount = 0.0
    credit_cards: Amount = 0.0
    loans: Amount = 0.0
    other_liabilities: Amount = 0.0


class GoalPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(default="", max_length=120)
    target_amount: Amount = 0.0
    current_amount: Amount = 0.0
    target_date: OptionalDate = None
    priority: GoalPriority = GoalPriority.MEDIUM
    notes: str = Field(default="", max_length=1000)

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or GoalPriority.MEDIUM.value
        return value

    def to_model(self) -> FinancialGoal:
        data = self.model_dump()
        data["priority"] = self.priority.value
        return FinancialGoal(**data)


class PolicyPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    policy_type: str = Field(default="term", max_length=32)
    insurance_company: str = Field(default="", max_length=120)
    policy_number: str = Field(default="", max_length=64)
    coverage_amount: Amount = 0.0
    premium: Amount = 0.0
    beneficiary: str = Field(default="", max_length=120)
    policy_start_date: OptionalDate = None
    policy_end_date: OptionalDate = None
    notes: str = Field(default="", max_length=1000)

    def to_model(self) -> InsurancePolicy:
        return InsurancePolicy(**self.model_dump())


_SECTIONS = ("income", "expenses", "assets", "liabilities")


class AnalysisUpdate(BaseModel):
    """Ledger sections are merged field by field; goal and policy lists are replaced."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    income: Optional[IncomeSection] = None
    expenses: Optional[ExpenseSection] = None
    assets: Optional[AssetSection] = None
    liabilities: Optional[LiabilitySection] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    goals: Optional[list[GoalPayload]] = None
    policies: Optional[list[PolicyPayload]] = None

    def changes(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for section in _SECTIONS:
            value = getattr(self, section)
            if value is not None:
                data.update(value.model_dump(exclude_unset=True))
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    def goal_models(self) -> Optional[list[FinancialGoal]]:
        if self.goals is None:
            return None
        return [goal.to_model() for goal in self.goals]

    def policy_models(self) -> Optional[list[InsurancePolicy]]:
        if self.policies is None:
            return None
        return [policy.to_model() for policy in self.policies]


class AnalysisCreate(AnalysisUpdate):
    client_id: int

    def to_model(self) -> FinancialAnalysis:
        return FinancialAnalysis(client_id=self.client_id, **self.changes())


__all__ = [
    "AnalysisCreate",
    "AnalysisUpdate",
    "GoalPayload",
    "GoalPriority",
    "PolicyPayload",
]
