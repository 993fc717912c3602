"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

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

    APP_NAME = "HabitStreak"
    DB_FILENAME = "habitstreak.db"
    ENV_PREFIX = "HABITSTREAK_"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = self._env("SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool(f"{self.ENV_PREFIX}DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = self._env("DATABASE_URL", self._build_sqlite_url())
        # IANA zone used to resolve "today"; None means the host's local zone.
        self.TIMEZONE: Optional[str] = self._env("TIMEZONE") or None
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITSTREAK_SECRET_KEY must be set in non-dev mode.")

    def _env(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(f"{self.ENV_PREFIX}{name}", default)

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        base_path = Path(self._env("DATA_DIR", "instance") or "instance").expanduser()
        path = base_path.resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestingConfig(BaseConfig):
    """Configuration for the test suite; callers usually override DATABASE_URL."""

    __test__ = False  # not a pytest test class
    TESTING = True

    def __init__(self, database_url: Optional[str] = None, data_dir: Optional[Path] = None) -> None:
        super().__init__()
        if data_dir is not None:
            self.DATA_DIR = Path(data_dir)
            self.DATA_DIR.mkdir(parents=True, exist_ok=True)
            self.DATABASE_URL = self._build_sqlite_url()
        if database_url is not None:
            self.DATABASE_URL = database_url


__all__ = ["BaseConfig", "DevConfig", "TestingConfig"]
