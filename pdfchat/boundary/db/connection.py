"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI dependency
for database session injection.

Dependencies: sqlalchemy, pdfchat.configs
System role: Database connection lifecycle management
"""

from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pdfchat.configs import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for_url(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for a database URL.

    SQLite connections get foreign key enforcement so ON DELETE CASCADE holds.

    Args:
        url: SQLAlchemy async database URL
        echo: Echo SQL statements to logs

    Returns:
        AsyncEngine: Configured async engine
    """
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(url, echo=echo, pool_pre_ping=True)


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Get the process-wide async engine.

    Returns:
        AsyncEngine: Engine built from DatabaseSettings, created once

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database
    return create_engine_for_url(db_config.url, echo=db_config.echo_sql)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine, without expiry on commit."""
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get the process-wide async session factory.

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return create_session_factory(get_async_engine())


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        from fastapi import Depends

        @router.get("/pdfs/{id}")
        async def get_pdf(id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await document_crud.get_by_id(db, id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def dispose_engine() -> None:
    """Dispose the process-wide engine and drop cached factories."""
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
    get_async_session_factory.cache_clear()
    get_async_engine.cache_clear()
