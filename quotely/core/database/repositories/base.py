"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns used across all
repository implementations. Built with async SQLAlchemy sessions; every
repository receives its session explicitly and never reaches for a global one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from quotely.core.errors import Conflict
from quotely.core.logging_config import get_logger

logger = get_logger(__name__)

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Base async repository interface with common operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity record.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated

        Raises:
            Conflict: If the store rejects the row on a uniqueness constraint
        """

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found
        """

    async def _persist(self, entity: EntityType, conflict_message: str, *, refresh: bool = True) -> EntityType:
        """Add, commit and refresh ``entity``, translating constraint violations.

        The session is rolled back before ``Conflict`` is raised so it stays
        usable for the caller. Pass ``refresh=False`` when every column is set
        client-side and the row may be deleted by another session right after
        the commit.
        """
        self.session.add(entity)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.debug(f"{self.model.__name__} insert rejected by constraint: {exc.orig}")
            raise Conflict(conflict_message) from exc
        if refresh:
            await self.session.refresh(entity)
        return entity


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a select statement.

        Args:
            stmt: Select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt

    @staticmethod
    def count_of(stmt):
        """Wrap a filtered select into a ``COUNT(*)`` over its rows."""
        return select(func.count()).select_from(stmt.order_by(None).subquery())

    @staticmethod
    def like_pattern(term: str) -> str:
        """Build a substring LIKE pattern that matches ``%`` and ``_`` literally."""
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return f"%{escaped}%"
