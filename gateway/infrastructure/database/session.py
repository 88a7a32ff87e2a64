"""Async engine and sessions for the metadata store."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gateway.core.config import get_settings
from gateway.infrastructure.database.base import Base
from gateway.infrastructure.database.errors import store_errors

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def _build_engine() -> AsyncEngine:
    settings = get_settings()
    engine_kwargs: dict[str, Any] = {"echo": settings.database.echo or settings.debug}
    # SQLite uses a single-file pool that rejects sizing arguments.
    if not settings.database_url.startswith("sqlite"):
        if settings.database.pool_size is not None:
            engine_kwargs["pool_size"] = settings.database.pool_size
        if settings.database.max_overflow is not None:
            engine_kwargs["max_overflow"] = settings.database.max_overflow

    return create_async_engine(settings.database_url, **engine_kwargs)


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        _engine = _build_engine()
        AsyncSessionFactory = async_sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    assert AsyncSessionFactory is not None
    return AsyncSessionFactory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables; Alembic remains the way to evolve the schema."""
    from gateway.db import models  # noqa: F401

    with store_errors("creating tables"):
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


async def reset_db() -> None:
    """Drop and recreate every table, discarding all customers and script configuration."""
    from gateway.db import models  # noqa: F401

    with store_errors("resetting tables"):
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, AsyncSessionFactory
    engine, _engine, AsyncSessionFactory = _engine, None, None
    if engine is not None:
        await engine.dispose()
