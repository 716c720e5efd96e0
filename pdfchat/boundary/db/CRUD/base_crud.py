"""
Base CRUD operations for SQLAlchemy models.

Provides generic create, read and delete operations that can be
inherited and extended by model-specific CRUD classes. None of the methods
commit; the caller owns the transaction.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations on models with a UUID ``id``.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Add a new record and flush it so generated fields are populated.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Retrieve a single record by primary key, or None."""
        return await session.get(self.model, id)

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a record by primary key.

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        stmt = select(self.model.id).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
