"""Demo data seeding."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from sqlmodel import Session, select

from ..logging_config import get_logger
from ..models import ChildDependent, Client, FinancialAnalysis, FinancialGoal, InsurancePolicy

logger = get_logger(__name__)

SessionFactory = Callable[[], Session]


@dataclass(slots=True)
class SeedSummary:
    """Counts of rows created by a seed run."""

    clients: int = 0
    analyses: int = 0
    goals: int = 0
    policies: int = 0


_DEMO_CLIENTS = [
    {
        "client": {
            "first_name": "Maria",
            "last_name": "Alvarez",
            "email": "maria.alvarez@example.com",
            "phone": "555-0142",
            "city": "Austin",
            "state": "TX",
            "date_of_birth": date(1986, 4, 12),
            "occupation": "Nurse Practitioner",
            "employer": "St. David's Medical",
            "marital_status": "married",
            "spouse_first_name": "Daniel",
            "spouse_last_name": "Alvarez",
            "spouse_occupation": "Librarian",
        },
        "children": [
            {"name": "Sofia", "date_of_birth": date(2014, 9, 3)},
            {"name": "Mateo", "date_of_birth": date(2017, 2, 21)},
        ],
        "analysis": {
            "primary_income": 98000,
            "spouse_income": 52000,
            "other_income": 3500,
            "housing": 26400,
            "transportation": 9600,
            "food": 12000,
            "healthcare": 4800,
            "insurance": 3600,
            "utilities": 4200,
            "entertainment": 3000,
            "other_expenses": 6000,
            "cash": 18000,
            "investments": 42000,
            "retirement": 135000,
            "real_estate": 410000,
            "personal_property": 25000,
            "mortgage": 298000,
            "credit_cards": 7400,
            "loans": 16500,
        },
        "goals": [
            {"name": "College fund", "target_amount": 120000, "current_amount": 28000,
             "target_date": date(2032, 8, 1), "priority": "high"},
            {"name": "Emergency fund", "target_amount": 30000, "current_amount": 18000,
             "priority": "medium"},
        ],
        "policies": [
            {"policy_type": "term", "insurance_company": "Northwind Life",
             "coverage_amount": 500000, "premium": 38, "beneficiary": "Daniel Alvarez"},
        ],
    },
    {
        "client": {
            "first_name": "James",
            "last_name": "Okafor",
            "email": "james.okafor@example.com",
            "phone": "555-0199",
            "city": "Columbus",
            "state": "OH",
            "date_of_birth": date(1992, 11, 30),
            "occupation": "Software Engineer",
            "employer": "Contoso",
            "marital_status": "single",
        },
        "children": [],
        "analysis": {
            "primary_income": 124000,
            "other_income": 1200,
            "housing": 22800,
            "transportation": 6000,
            "food": 8400,
            "healthcare": 2400,
            "insurance": 1800,
            "utilities": 2600,
            "entertainment": 4800,
            "other_expenses": 3000,
            "cash": 12000,
            "investments": 36000,
            "retirement": 58000,
            "credit_cards": 8000,
            "loans": 31000,
        },
        "goals": [
            {"name": "Down payment", "target_amount": 80000, "current_amount": 12000,
             "target_date": date(2028, 6, 1), "priority": "high"},
        ],
        "policies": [],
    },
]


def seed_demo(session_factory: SessionFactory) -> SeedSummary:
    """Create the demo clients; clients already present (by email) are skipped."""

    summary = SeedSummary()
    with session_factory() as session:
        for entry in _DEMO_CLIENTS:
            email = entry["client"]["email"]
            if session.exec(select(Client).where(Client.email == email)).first() is not None:
                continue

            client = Client(**entry["client"])
            session.add(client)
            session.flush()
            for child in entry["children"]:
                session.add(ChildDependent(client_id=client.id, **child))

            analysis = FinancialAnalysis(client_id=client.id, **entry["analysis"])
            session.add(analysis)
            session.flush()
            for goal in entry["goals"]:
                session.add(FinancialGoal(analysis_id=analysis.id, **goal))
            for policy in entry["policies"]:
                session.add(InsurancePolicy(analysis_id=analysis.id, **policy))

            summary.clients += 1
            summary.analyses += 1
            summary.goals += len(entry["goals"])
            summary.policies += len(entry["policies"])
        session.commit()

    logger.info("Demo seed finished", extra={"clients": summary.clients})
    return summary


__all__ = ["SeedSummary", "seed_demo"]
