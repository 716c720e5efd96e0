"""
Database table creation.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, pdfchat.boundary.db
System role: Database schema initialization

Usage:
    python -m pdfchat.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from pdfchat.boundary.db.base import Base
from pdfchat.boundary.db.connection import dispose_engine, get_async_engine

# Import all models to register them with Base.metadata
from pdfchat.boundary.db.models.chat_message_model import ChatMessageModel  # noqa: F401
from pdfchat.boundary.db.models.document_model import DocumentModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Target engine (process-wide engine if None)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def _main() -> None:
    await create_all_tables()
    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(_main())
