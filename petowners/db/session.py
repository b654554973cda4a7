"""
Database session management.

WHY: Async database sessions are required for FastAPI's async/await pattern.
Using a context manager ensures proper connection cleanup and transaction management.
"""

import logging
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from petowners.core.config import settings
from petowners.models.base import Base


logger = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    WHY: pool_pre_ping recycles stale connections. Pool sizing only applies
    to server databases; SQLite engines manage their own connection pool.

    Args:
        url: Async SQLAlchemy URL (sqlite+aiosqlite://, postgresql+asyncpg://)
        echo: Log emitted SQL

    Returns:
        AsyncEngine
    """
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)

    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create a session factory bound to an engine.

    WHY: expire_on_commit=False keeps loaded attributes (including the
    eagerly joined owner) readable after the session closes, which is
    when the response gets serialized.
    """
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = build_engine(settings.async_database_url, echo=settings.DEBUG)
AsyncSessionLocal = build_session_factory(engine)


async def init_db(bind: AsyncEngine) -> None:
    """
    Create all tables that don't exist yet.

    WHY: The schema is small and fixed, so tables are created straight from
    the model metadata at startup instead of through migrations.
    """
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")
