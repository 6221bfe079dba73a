"""Financial analysis ledgers, goals and insurance policies."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FinancialAnalysis(SQLModel, table=True):
    """Income, expense, asset and liability ledger for one client.

    Amounts are annual figures; totals are derived in
    :mod:`fincounsel.services.metrics` rather than stored.
    """

    __tablename__: ClassVar[str] = "financial_analysis"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="client.id", nullable=False, index=True, unique=True)

    # Income
    primary_income: float = Field(default=0.0, nullable=False)
    spouse_income: float = Field(default=0.0, nullable=False)
    other_income: float = Field(default=0.0, nullable=False)

    # Expenses
    housing: float = Field(default=0.0, nullable=False)
    transportation: float = Field(default=0.0, nullable=False)
    food: float = Field(default=0.0, nullable=False)
    healthcare: float = Field(default=0.0, nullable=False)
    insurance: float = Field(default=0.0, nullable=False)
    utilities: float = Field(default=0.0, nullable=False)
    entertainment: float = Field(default=0.0, nullable=False)
    other_expenses: float = Field(default=0.0, nullable=False)

    # Assets
    cash: float = Field(default=0.0, nullable=False)
    investments: float = Field(default=0.0, nullable=False)
    retirement: float = Field(default=0.0, nullable=False)
    real_estate: float = Field(default=0.0, nullable=False)
    personal_property: float = Field(default=0.0, nullable=False)

    # Liabilities
    mortgage: float = Field(default=0.0, nullable=False)
    credit_cards: float = Field(default=0.0, nullable=False)
    loans: float = Field(default=0.0, nullable=False)
    other_liabilities: float = Field(default=0.0, nullable=False)

    notes: str = Field(default="", max_length=2000)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    client = Relationship(sa_relationship=relationship("Client", back_populates="analyses"))
    goals = Relationship(
        sa_relationship=relationship(
            "FinancialGoal", back_populates="analysis", cascade="all, delete-orphan"
        ),
    )
    policies = Relationship(
        sa_relationship=relationship(
            "InsurancePolicy", back_populates="analysis", cascade="all, delete-orphan"
        ),
    )


class FinancialGoal(SQLModel, table=True):
    __tablename__: ClassVar[str] = "financial_goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    analysis_id: int = Field(foreign_key="financial_analysis.id", nullable=False, index=True)
    name: str = Field(default="", max_length=120)
    target_amount: float = Field(default=0.0, nullable=False)
    current_amount: float = Field(default=0.0, nullable=False)
    target_date: Optional[date] = Field(default=None)
    priority: str = Field(default="medium", max_length=16)
    notes: str = Field(default="", max_length=1000)

    analysis = Relationship(
        sa_relationship=relationship("FinancialAnalysis", back_populates="goals")
    )


class InsurancePolicy(SQLModel, table=True):
    """Existing life insurance policy recorded on an analysis."""

    __tablename__: ClassVar[str] = "insurance_policy"

    id: Optional[int] = Field(default=None, primary_key=True)
    analysis_id: int = Field(foreign_key="financial_analysis.id", nullable=False, index=True)
    policy_type: str = Field(default="term", max_length=32)
    insurance_company: str = Field(default="", max_length=120)
    policy_number: str = Field(default="", max_length=64)
    coverage_amount: float = Field(default=0.0, nullable=False)
    premium: float = Field(default=0.0, nullable=False)
    beneficiary: str = Field(default="", max_length=120)
    policy_start_date: Optional[date] = Field(default=None)
    policy_end_date: Optional[date] = Field(default=None)
    notes: str = Field(default="", max_length=1000)

    analysis = Relationship(
        sa_relationship=relationship("FinancialAnalysis", back_populates="policies")
    )
