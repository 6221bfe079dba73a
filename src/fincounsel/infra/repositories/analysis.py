"""SQLModel implementation of the analysis repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.analysis import FinancialAnalysis, FinancialGoal, InsurancePolicy

logger = get_logger(__name__)


class SQLModelAnalysisRepository:
    """SQLModel-based analysis repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, analysis_id: int) -> Optional[FinancialAnalysis]:
        with self.session_factory() as session:
            return session.get(FinancialAnalysis, analysis_id)

    def get_for_client(self, client_id: int) -> Optional[FinancialAnalysis]:
        with self.session_factory() as session:
            statement = select(FinancialAnalysis).where(FinancialAnalysis.client_id == client_id)
            return session.exec(statement).first()

    def list_all(self) -> list[FinancialAnalysis]:
        with self.session_factory() as session:
            statement = select(FinancialAnalysis).order_by(FinancialAnalysis.id)  # type: ignore
            return list(session.exec(statement).all())

    def create(
        self,
        analysis: FinancialAnalysis,
        *,
        goals: Sequence[FinancialGoal] = (),
        policies: Sequence[InsurancePolicy] = (),
    ) -> FinancialAnalysis:
        with self.session_factory() as session:
            session.add(analysis)
            session.flush()
            self._attach(session, analysis.id, goals=goals, policies=policies)
            session.commit()
            session.refresh(analysis)
            logger.info(
                "Analysis created",
                extra={"analysis_id": analysis.id, "client_id": analysis.client_id},
            )
            return analysis

    def update(
        self,
        analysis_id: int,
        changes: Mapping[str, Any],
        *,
        goals: Optional[Sequence[FinancialGoal]] = None,
        policies: Optional[Sequence[InsurancePolicy]] = None,
    ) -> Optional[FinancialAnalysis]:
        """Apply ledger changes; ``goals``/``policies`` replace the lists when given."""
        with self.session_factory() as session:
            analysis = session.get(FinancialAnalysis, analysis_id)
            if analysis is None:
                return None
            for field_name, value in changes.items():
                if field_name in ("id", "client_id", "created_at"):
                    continue
                setattr(analysis, field_name, value)
            analysis.updated_at = datetime.now(timezone.utc)
            session.add(analysis)

            if goals is not None:
                for goal in session.exec(
                    select(FinancialGoal).where(FinancialGoal.analysis_id == analysis_id)
                ).all():
                    session.delete(goal)
            if policies is not None:
                for policy in session.exec(
                    select(InsurancePolicy).where(InsurancePolicy.analysis_id == analysis_id)
                ).all():
                    session.delete(policy)
            self._attach(session, analysis_id, goals=goals or (), policies=policies or ())

            session.commit()
            session.refresh(analysis)
            return analysis

    def delete(self, analysis_id: int) -> bool:
        with self.session_factory() as session:
            analysis = session.get(FinancialAnalysis, analysis_id)
            if analysis is None:
                return False
            session.delete(analysis)
            session.commit()
            return True

    def list_goals(self, analysis_id: int) -> list[FinancialGoal]:
        with self.session_factory() as session:
            statement = (
                select(FinancialGoal)
                .where(FinancialGoal.analysis_id == analysis_id)
                .order_by(FinancialGoal.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def list_policies(self, analysis_id: int) -> list[InsurancePolicy]:
        with self.session_factory() as session:
            statement = (
                select(InsurancePolicy)
                .where(InsurancePolicy.analysis_id == analysis_id)
                .order_by(InsurancePolicy.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    @staticmethod
    def _attach(
        session: Session,
        analysis_id: Optional[int],
        *,
        goals: Sequence[FinancialGoal],
        policies: Sequence[InsurancePolicy],
    ) -> None:
        for goal in goals:
            goal.analysis_id = analysis_id
            session.add(goal)
        for policy in policies:
            policy.analysis_id = analysis_id
            session.add(policy)
