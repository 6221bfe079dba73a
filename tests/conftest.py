"""Pytest configuration and shared fixtures for FinCounsel tests.

Provides isolated SQLite databases, model factories and a Flask app wired to
a temporary data directory so tests never touch the real instance folder.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from fincounsel import create_app
from fincounsel.models import (
    ChildDependent,
    Client,
    FinancialAnalysis,
    FinancialGoal,
    InsurancePolicy,
)

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with every table created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session committed on success and rolled back on failure."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the ``Callable[[], Session]`` repositories expect."""

    def factory() -> Session:
        return Session(db_engine, expire_on_commit=False)

    return factory


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch):
    """Application using the testing config with its data dir under ``tmp_path``."""
    monkeypatch.setenv("FINCOUNSEL_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("FINCOUNSEL_DATABASE_URL", raising=False)
    monkeypatch.setenv("FINCOUNSEL_DEV_MODE", "true")
    application = create_app("testing")
    yield application
    application.extensions["fincounsel_engine"].dispose()


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


# =============================================================================
# Model Factories
# =============================================================================


@pytest.fixture
def client_factory(session_factory):
    """Factory for persisted client profiles."""

    def _create(**overrides) -> Client:
        defaults = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "date_of_birth": date(1985, 12, 10),
            "occupation": "Analyst",
            "marital_status": "married",
        }
        defaults.update(overrides)
        children = defaults.pop("children", [])
        with session_factory() as session:
            row = Client(**defaults)
            session.add(row)
            session.flush()
            for child in children:
                session.add(ChildDependent(client_id=row.id, **child))
            session.commit()
            session.refresh(row)
            return row

    return _create


@pytest.fixture
def analysis_factory(session_factory):
    """Factory for analyses with optional goals and policies."""

    def _create(client_id: int, goals=(), policies=(), **overrides) -> FinancialAnalysis:
        defaults = {
            "primary_income": 100000.0,
            "housing": 30000.0,
            "food": 10000.0,
            "cash": 50000.0,
            "loans": 25000.0,
        }
        defaults.update(overrides)
        with session_factory() as session:
            row = FinancialAnalysis(client_id=client_id, **defaults)
            session.add(row)
            session.flush()
            for goal in goals:
                session.add(FinancialGoal(analysis_id=row.id, **goal))
            for policy in policies:
                session.add(InsurancePolicy(analysis_id=row.id, **policy))
            session.commit()
            session.refresh(row)
            return row

    return _create


# =============================================================================
# Helpers
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01) -> None:
    """Assert two money amounts match within ``tolerance``."""
    assert abs(actual - expected) <= tolerance, f"expected {expected}, got {actual}"
