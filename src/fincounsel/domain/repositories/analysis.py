"""Financial analysis repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ...models.analysis import FinancialAnalysis, FinancialGoal, InsurancePolicy


class AnalysisRepository(Protocol):
    """Repository for analyses and their goals and policies."""

    def get_by_id(self, analysis_id: int) -> Optional[FinancialAnalysis]:
        ...

    def get_for_client(self, client_id: int) -> Optional[FinancialAnalysis]:
        ...

    def list_all(self) -> list[FinancialAnalysis]:
        ...

    def create(
        self,
        analysis: FinancialAnalysis,
        *,
        goals: Sequence[FinancialGoal] = (),
        policies: Sequence[InsurancePolicy] = (),
    ) -> FinancialAnalysis:
        ...

    def update(
        self,
        analysis_id: int,
        changes: Mapping[str, Any],
        *,
        goals: Optional[Sequence[FinancialGoal]] = None,
        policies: Optional[Sequence[InsurancePolicy]] = None,
    ) -> Optional[FinancialAnalysis]:
        """Apply ledger changes; ``goals``/``policies`` replace the lists when given."""
        ...

    def delete(self, analysis_id: int) -> bool:
        ...

    def list_goals(self, analysis_id: int) -> list[FinancialGoal]:
        ...

    def list_policies(self, analysis_id: int) -> list[InsurancePolicy]:
        ...
