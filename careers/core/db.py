from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.pool import NullPool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from careers.core.settings import get_settings

_settings = get_settings()
logger = logging.getLogger(__name__)

SUPPORTED_DRIVERS = ("postgresql+asyncpg", "sqlite+aiosqlite")


def _preflight_database_backend(url: str) -> None:
    try:
        parsed = make_url(url)
    except ArgumentError as exc:  # pragma: no cover - configuration guard
        raise RuntimeError(f"Invalid DATABASE_URL: {exc}") from exc

    driver = (parsed.drivername or "").lower()
    masked_url = parsed.render_as_string(hide_password=True)
    logger.info("Database dialect: %s (%s)", driver or "unknown", masked_url)

    if driver not in SUPPORTED_DRIVERS:
        raise RuntimeError(
            f"Unsupported database driver: {driver}. "
            f"Set DATABASE_URL to one of: {', '.join(SUPPORTED_DRIVERS)}"
        )


def _engine_kwargs() -> dict:
    kwargs = {"echo": _settings.sql_echo, "future": True}
    if _settings.is_sqlite:
        # aiosqlite connections are bound to the loop that opened them.
        kwargs["poolclass"] = NullPool
        return kwargs
    kwargs.update(
        pool_size=_settings.db_pool_size,
        max_overflow=_settings.db_max_overflow,
        pool_timeout=_settings.db_pool_timeout,
        pool_pre_ping=True,
        pool_recycle=_settings.db_pool_recycle,
    )
    return kwargs


_preflight_database_backend(_settings.database_url)

async_engine: AsyncEngine = create_async_engine(_settings.database_url, **_engine_kwargs())
_async_session_factory = async_sessionmaker(
    bind=async_engine,
    expire_on_commit=False,
    class_=AsyncSession,
)


async def init_models() -> None:
    """Create any missing tables."""
    from careers.domain.base import Base
    import careers.domain.models  # noqa: F401  registers mappers

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def new_async_session() -> AsyncSession:
    return _async_session_factory()


@asynccontextmanager
async def async_session() -> AsyncIterator[AsyncSession]:
    session = new_async_session()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


__all__ = [
    "async_session",
    "new_async_session",
    "init_models",
    "async_engine",
]
