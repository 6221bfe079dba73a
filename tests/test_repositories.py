"""SQLModel repositories for clients and analyses."""

from __future__ import annotations

from datetime import date

from sqlmodel import select

from fincounsel.infra.repositories import SQLModelAnalysisRepository, SQLModelClientRepository
from fincounsel.models import (
    ChildDependent,
    Client,
    FinancialAnalysis,
    FinancialGoal,
    InsurancePolicy,
)
from fincounsel.services.seed import seed_demo


class TestClientRepository:
    def test_create_with_children(self, session_factory):
        repo = SQLModelClientRepository(session_factory)

        created = repo.create(
            Client(first_name="Grace", last_name="Hopper", email="grace@example.com"),
            children=[ChildDependent(name="Walter", date_of_birth=date(2015, 1, 2))],
        )

        assert created.id is not None
        children = repo.list_children(created.id)
        assert [child.name for child in children] == ["Walter"]
        assert repo.get_by_id(created.id).full_name == "Grace Hopper"

    def test_list_all_sorted_by_name(self, session_factory, client_factory):
        client_factory(first_name="Zed", last_name="Young")
        client_factory(first_name="Amy", last_name="Baker")

        names = [c.last_name for c in SQLModelClientRepository(session_factory).list_all()]

        assert names == ["Baker", "Young"]

    def test_search_matches_name_or_email(self, session_factory, client_factory):
        client_factory(first_name="Maria", last_name="Lopez", email="ml@example.com")
        client_factory(first_name="John", last_name="Smith", email="js@corp.test")
        repo = SQLModelClientRepository(session_factory)

        assert [c.first_name for c in repo.search("lop")] == ["Maria"]
        assert [c.first_name for c in repo.search("corp")] == ["John"]
        assert repo.search("nobody") == []

    def test_update_applies_changes(self, session_factory, client_factory):
        row = client_factory()
        repo = SQLModelClientRepository(session_factory)

        updated = repo.update(row.id, {"occupation": "Engineer", "id": 999})

        assert updated.id == row.id
        assert updated.occupation == "Engineer"

    def test_update_missing_returns_none(self, session_factory):
        assert SQLModelClientRepository(session_factory).update(42, {"city": "Nowhere"}) is None

    def test_replace_children(self, session_factory, client_factory):
        row = client_factory(children=[{"name": "Old"}])
        repo = SQLModelClientRepository(session_factory)

        repo.replace_children(row.id, [ChildDependent(name="New A"), ChildDependent(name="New B")])

        assert [c.name for c in repo.list_children(row.id)] == ["New A", "New B"]

    def test_delete_cascades(self, session_factory, client_factory, analysis_factory):
        row = client_factory(children=[{"name": "Kid"}])
        analysis_factory(row.id, goals=[{"name": "Travel", "target_amount": 5000}])
        repo = SQLModelClientRepository(session_factory)

        assert repo.delete(row.id) is True
        assert repo.delete(row.id) is False

        with session_factory() as session:
            assert session.exec(select(ChildDependent)).all() == []
            assert session.exec(select(FinancialAnalysis)).all() == []
            assert session.exec(select(FinancialGoal)).all() == []


class TestAnalysisRepository:
    def test_create_with_goals_and_policies(self, session_factory, client_factory):
        owner = client_factory()
        repo = SQLModelAnalysisRepository(session_factory)

        analysis = repo.create(
            FinancialAnalysis(client_id=owner.id, primary_income=80000),
            goals=[FinancialGoal(name="House", target_amount=60000)],
            policies=[InsurancePolicy(insurance_company="Acme", coverage_amount=250000)],
        )

        assert repo.get_for_client(owner.id).id == analysis.id
        assert [g.name for g in repo.list_goals(analysis.id)] == ["House"]
        assert [p.insurance_company for p in repo.list_policies(analysis.id)] == ["Acme"]

    def test_update_keeps_lists_unless_given(
        self, session_factory, client_factory, analysis_factory
    ):
        owner = client_factory()
        analysis = analysis_factory(owner.id, goals=[{"name": "Boat", "target_amount": 9000}])
        repo = SQLModelAnalysisRepository(session_factory)

        repo.update(analysis.id, {"cash": 1234.0})
        assert [g.name for g in repo.list_goals(analysis.id)] == ["Boat"]

        updated = repo.update(
            analysis.id, {}, goals=[FinancialGoal(name="Car", target_amount=20000)], policies=[]
        )
        assert updated.cash == 1234.0
        assert [g.name for g in repo.list_goals(analysis.id)] == ["Car"]
        assert repo.list_policies(analysis.id) == []

    def test_update_ignores_client_id(self, session_factory, client_factory, analysis_factory):
        owner = client_factory()
        analysis = analysis_factory(owner.id)

        updated = SQLModelAnalysisRepository(session_factory).update(
            analysis.id, {"client_id": owner.id + 100}
        )

        assert updated.client_id == owner.id

    def test_missing_analysis(self, session_factory):
        repo = SQLModelAnalysisRepository(session_factory)

        assert repo.get_by_id(1) is None
        assert repo.get_for_client(1) is None
        assert repo.update(1, {"cash": 1.0}) is None
        assert repo.delete(1) is False


class TestSeed:
    def test_seed_is_idempotent(self, session_factory):
        first = seed_demo(session_factory)
        second = seed_demo(session_factory)

        assert first.clients == 2
        assert first.analyses == 2
        assert first.goals == 3
        assert first.policies == 1
        assert second.clients == 0

        assert len(SQLModelClientRepository(session_factory).list_all()) == 2
        assert len(SQLModelAnalysisRepository(session_factory).list_all()) == 2
