"""
Database engine and session lifecycle.

``Database`` owns one AsyncEngine and its session factory. The server builds
it in the application lifespan and disposes it at shutdown; nothing in the
package holds a module-level engine.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from quotely.core.logging_config import get_logger

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)


class Database:
    """Engine plus session factory for one relational store."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.engine: AsyncEngine = create_engine(url, echo=echo)
        self.session_factory: async_sessionmaker[AsyncSession] = create_sessionmaker(self.engine)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Open a session and close it afterwards.

        Yields:
            AsyncSession: An asynchronous SQLAlchemy session.
        """
        async with self.session_factory() as session:
            yield session

    async def create_all(self) -> None:
        """Create missing tables. Alembic migrations are the production path."""
        await create_all(self.engine)
        logger.info("Database tables created")

    async def dispose(self) -> None:
        """Release every pooled connection."""
        await self.engine.dispose()
        logger.debug("Database engine disposed")
