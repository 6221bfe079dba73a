"""Client profile entities."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Client(SQLModel, table=True):
    """Household an advisor builds analyses for."""

    __tablename__: ClassVar[str] = "client"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(nullable=False, max_length=80, index=True)
    last_name: str = Field(nullable=False, max_length=80, index=True)
    email: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=40)
    address: str = Field(default="", max_length=255)
    city: str = Field(default="", max_length=80)
    state: str = Field(default="", max_length=40)
    zip_code: str = Field(default="", max_length=20)
    date_of_birth: Optional[date] = Field(default=None)
    occupation: str = Field(default="", max_length=120)
    employer: str = Field(default="", max_length=120)
    marital_status: str = Field(default="single", max_length=16)

    spouse_first_name: str = Field(default="", max_length=80)
    spouse_last_name: str = Field(default="", max_length=80)
    spouse_date_of_birth: Optional[date] = Field(default=None)
    spouse_occupation: str = Field(default="", max_length=120)
    spouse_employer: str = Field(default="", max_length=120)
    spouse_phone: str = Field(default="", max_length=40)
    spouse_email: str = Field(default="", max_length=255)

    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    children = Relationship(
        sa_relationship=relationship(
            "ChildDependent", back_populates="client", cascade="all, delete-orphan"
        ),
    )
    analyses = Relationship(
        sa_relationship=relationship(
            "FinancialAnalysis", back_populates="client", cascade="all, delete-orphan"
        ),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ChildDependent(SQLModel, table=True):
    """Child listed on a client profile."""

    __tablename__: ClassVar[str] = "child_dependent"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="client.id", nullable=False, index=True)
    name: str = Field(default="", max_length=120)
    date_of_birth: Optional[date] = Field(default=None)

    client = Relationship(sa_relationship=relationship("Client", back_populates="children"))


def age_on(born: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole years between ``born`` and ``today``."""

    if born is None:
        return None
    today = today or date.today()
    years = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        years -= 1
    return years
