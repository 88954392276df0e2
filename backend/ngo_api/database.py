"""
NGO Site Backend - Database Engine & Session Management
=======================================================

What:  Async SQLAlchemy engine factory, session factory and the session scope
       used by the SQL record store.
How:   `build_engine()` creates the engine from settings, `session_scope()`
       yields a session that commits on success and rolls back on error.
Who:   `bootstrap.build_services()` when STORAGE_BACKEND=database; Alembic
       imports `Base` for migrations.
When:  Engine is built once per application; sessions are opened per
       record-store operation.

Connection Pooling:
    pool_size / max_overflow come from settings (DB_POOL_SIZE, DB_MAX_OVERFLOW).
    pool_pre_ping validates connections before use.
    pool_recycle=3600 recycles connections every hour.
    SQLite URLs skip the pool arguments.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ngo_api.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, `create_tables()`
    and Alembic's autogenerate.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine described by DATABASE_URL."""
    kwargs = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: row attributes stay readable after commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── Session Scope ─────────────────────────────────────────────────────────
@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    Provide a transactional session around one record-store operation.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller
        3. On success: commits the transaction
        4. On error: rolls back and re-raises
        5. Always: closes the session (returns connection to pool)

    Example:
        async with session_scope(factory) as session:
            session.add(Member(...))
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(engine: AsyncEngine) -> None:
    """
    Create every mapped table that does not exist yet.

    Used when DB_AUTO_CREATE is set and by the test suite; production schemas
    are managed with `alembic upgrade head`.
    """
    # Register models with Base.metadata before create_all
    from ngo_api.models import Event, Member  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close all pooled connections (application shutdown)."""
    await engine.dispose()
