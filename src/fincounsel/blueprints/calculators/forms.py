"""Calculator payload definitions."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...services.debts import (
    DEFAULT_EXTRA_PAYMENT,
    DEFAULT_STRATEGY,
    Debt,
    PayoffStrategy,
    default_debts,
)
from ...services.insurance import CoverageMethod, InsuranceProfile
from ..common import Amount, DecimalAmount


class DebtRow(BaseModel):
    """One editable row of the payoff calculator."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = None
    name: str = Field(default="", max_length=120)
    balance: DecimalAmount = Decimal("0")
    min_payment: DecimalAmount = Decimal("0")
    interest_rate: DecimalAmount = Decimal("0")

    def to_debt(self, position: int) -> Debt:
        return Debt(
            id=self.id if self.id is not None else position,
            name=self.name or f"Debt {position}",
            balance=self.balance,
            min_payment=self.min_payment,
            interest_rate=self.interest_rate,
        )


def _default_rows() -> list[DebtRow]:
    return [
        DebtRow(
            id=debt.id,
            name=debt.name,
            balance=debt.balance,
            min_payment=debt.min_payment,
            interest_rate=debt.interest_rate,
        )
        for debt in default_debts()
    ]


class DebtCalculatorForm(BaseModel):
    """Debt payoff calculator inputs; missing ``debts`` falls back to the examples."""

    debts: list[DebtRow] = Field(default_factory=_default_rows)
    extra_payment: DecimalAmount = DEFAULT_EXTRA_PAYMENT
    strategy: PayoffStrategy = DEFAULT_STRATEGY

    @field_validator("strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_debts(self) -> list[Debt]:
        return [row.to_debt(position) for position, row in enumerate(self.debts, start=1)]


class InsuranceForm(BaseModel):
    """Life insurance calculator inputs."""

    age: Amount = 35
    annual_income: Amount = 75000
    existing_coverage: Amount = 0
    mortgage: Amount = 300000
    other_debts: Amount = 50000
    children_count: int = Field(default=2, ge=0)
    years_to_support: Amount = 18
    spouse_income: Amount = 50000
    emergency_fund_months: Amount = 6
    education_costs: Amount = 100000
    final_expenses: Amount = 15000
    method: CoverageMethod = CoverageMethod.INCOME_REPLACEMENT

    def to_profile(self) -> InsuranceProfile:
        return InsuranceProfile(**self.model_dump(exclude={"method"}))


__all__ = ["DebtCalculatorForm", "DebtRow", "InsuranceForm"]
