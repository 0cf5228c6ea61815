from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from careers.core.env import load_env


PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DATA_DIR = Path.home() / ".careers_availability" / "data"


@dataclass(frozen=True)
class Settings:
    environment: str  # development, production, staging
    data_dir: Path
    database_url: str
    sql_echo: bool
    db_pool_size: int
    db_max_overflow: int
    db_pool_timeout: int
    db_pool_recycle: int
    log_level: str
    log_json: bool
    log_file: str
    timezone: str
    api_docs_enabled: bool
    cors_origins: tuple[str, ...]
    candidate_api_url: str
    candidate_api_timeout: float

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def _get_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except (TypeError, ValueError):
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _get_float(name: str, default: float, *, minimum: Optional[float] = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw.strip())
    except (TypeError, ValueError):
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


load_env()


def _default_data_dir() -> Path:
    env_dir = os.getenv("DATA_DIR")
    if env_dir and env_dir.strip():
        return Path(env_dir).expanduser()
    return DEFAULT_DATA_DIR


def _normalize_database_url(url: str) -> str:
    """Force async drivers: plain sqlite/postgresql URLs get aiosqlite/asyncpg."""
    if url.startswith("sqlite+aiosqlite") or url.startswith("postgresql+asyncpg"):
        return url
    if url.startswith("sqlite"):
        path = url.split("///", maxsplit=1)[-1]
        return f"sqlite+aiosqlite:///{path}"
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    environment = os.getenv("ENVIRONMENT", "development").strip().lower()
    if environment not in {"development", "production", "staging"}:
        environment = "development"

    data_dir = _default_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)

    db_url_env = (os.getenv("DATABASE_URL") or "").strip()
    if db_url_env:
        database_url = _normalize_database_url(db_url_env)
    else:
        database_url = f"sqlite+aiosqlite:///{data_dir / 'careers.db'}"

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    log_file = os.getenv("LOG_FILE", "").strip()
    if not log_file:
        log_dir = data_dir / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = str(log_dir / "careers.log")

    timezone = os.getenv("TZ", "UTC").strip() or "UTC"

    settings = Settings(
        environment=environment,
        data_dir=data_dir,
        database_url=database_url,
        sql_echo=_get_bool("SQL_ECHO", default=False),
        db_pool_size=_get_int("DB_POOL_SIZE", 10, minimum=1),
        db_max_overflow=_get_int("DB_MAX_OVERFLOW", 5, minimum=0),
        db_pool_timeout=_get_int("DB_POOL_TIMEOUT", 30, minimum=1),
        db_pool_recycle=_get_int("DB_POOL_RECYCLE", 3600, minimum=60),
        log_level=log_level,
        log_json=_get_bool("LOG_JSON", default=False),
        log_file=log_file,
        timezone=timezone,
        api_docs_enabled=_get_bool("API_DOCS_ENABLED", default=environment != "production"),
        cors_origins=_get_list("CORS_ORIGINS"),
        candidate_api_url=os.getenv("CANDIDATE_API_URL", "http://localhost:8000").strip().rstrip("/"),
        candidate_api_timeout=_get_float("CANDIDATE_API_TIMEOUT", 10.0, minimum=0.1),
    )

    if environment == "production" and settings.is_sqlite:
        logging.warning(
            "Running in production against SQLite (%s). Set DATABASE_URL to a "
            "postgresql+asyncpg URL.",
            database_url,
        )

    return settings


__all__ = ["Settings", "get_settings", "PROJECT_ROOT"]
