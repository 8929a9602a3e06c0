"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from funds_ledger.core.config import DatabaseSettings, get_settings
from funds_ledger.infrastructure.database.base import Base

_engine: AsyncEngine | None = None


def build_engine(database: DatabaseSettings, *, debug: bool = False) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {
        "echo": database.echo or debug,
        "future": True,
    }
    if database.pool_size is not None:
        engine_kwargs["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        engine_kwargs["max_overflow"] = database.max_overflow
    if database.isolation_level is not None:
        engine_kwargs["isolation_level"] = database.isolation_level

    return create_async_engine(database.url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def get_engine() -> AsyncEngine:
    """Process-wide engine built from the cached settings (used by migrations)."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database, debug=settings.debug)
    return _engine


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create database tables in development mode (migrations preferred)."""
    # imported for its side effect of registering tables on Base.metadata
    from funds_ledger.db import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
