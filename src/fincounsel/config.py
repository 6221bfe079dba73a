"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FinCounsel"
    DB_FILENAME = "fincounsel.db"
    REPORTS_DIRNAME = "reports"
    LOG_FILENAME = "fincounsel.log"
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("FINCOUNSEL_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = self._resolve_dev_mode()
        self.DATABASE_URL = os.getenv("FINCOUNSEL_DATABASE_URL", self._build_sqlite_url())
        self.SQL_ECHO = _env_bool("FINCOUNSEL_SQL_ECHO", default=False)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("FINCOUNSEL_SECRET_KEY must be set in non-dev mode.")

    def _resolve_dev_mode(self) -> bool:
        return _env_bool("FINCOUNSEL_DEV_MODE", default=True)

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file, logs and reports live."""

        data_root = os.getenv("FINCOUNSEL_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    @property
    def REPORTS_DIR(self) -> Path:
        return self.DATA_DIR / self.REPORTS_DIRNAME

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {"echo": self.SQL_ECHO}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; callers point DATA_DIR at a tmp dir."""

    TESTING = True

    def _resolve_dev_mode(self) -> bool:
        return True
