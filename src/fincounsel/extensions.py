"""Database and extension wiring for FinCounsel."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from flask import Flask, current_app
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from . import models  # noqa: F401  # ensure models registered with SQLModel metadata
from .config import BaseConfig

_engine: Engine | None = None


def create_db_engine(config: BaseConfig) -> Engine:
    """Create the SQLModel engine from configuration."""

    return create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())


def init_database(engine: Engine) -> None:
    """Create every table registered on the SQLModel metadata."""

    with engine.begin() as connection:
        SQLModel.metadata.create_all(connection)


def init_db(app: Flask) -> None:
    """Initialize the SQLModel engine using configuration from the app."""

    config: BaseConfig = app.config["FINCOUNSEL_CONFIG"]
    engine = create_db_engine(config)

    global _engine
    _engine = engine
    app.extensions["fincounsel_engine"] = engine
    init_database(engine)


def get_engine() -> Engine:
    """Return the engine for the active app, falling back to the module engine."""

    try:
        engine = current_app.extensions.get("fincounsel_engine")
    except RuntimeError:
        engine = None
    engine = engine or _engine
    if engine is None:  # pragma: no cover - exercised in integration tests
        raise RuntimeError("Database engine not initialized")
    return engine


def create_session_factory(engine: Engine) -> Callable[[], Session]:
    """Return a callable producing sessions that keep attributes after commit."""

    def factory() -> Session:
        return Session(engine, expire_on_commit=False)

    return factory


def session_factory() -> Callable[[], Session]:
    """Session factory bound to the current engine, for repositories."""

    return create_session_factory(get_engine())


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around operations."""

    session = Session(get_engine(), expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
