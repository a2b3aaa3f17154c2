"""
Database utility functions for engine and session management.

This module provides the core utility functions for creating database engines,
session factories, and repository bundles.

Functions:
- create_engine: Creates async SQLAlchemy engine with URL normalization
- create_sessionmaker: Creates async session factory with safe defaults
- create_all: Creates all tables from ORM metadata (for tests/dev)
- build_repos: Builds the repository bundle for one session
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from . import entities  # noqa: F401  registers every table on the metadata
from .base import Base
from .repositories import ContentItemRepository, RelationshipRepository, UserRepository


def normalize_url(db_url: str) -> str:
    """Rewrite ``postgres://`` style URLs to use the asyncpg driver."""
    return re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://", db_url, count=1)


def create_engine(db_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    The helper normalizes Postgres URLs to ensure the async driver is used.
    For example, it rewrites ``postgresql://`` and other variants to
    ``postgresql+asyncpg://``.

    Args:
        db_url: Database connection URL
        echo: Echo SQL statements

    Returns:
        Configured AsyncEngine instance
    """
    return create_async_engine(normalize_url(db_url), echo=echo, pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata.

    This is mainly intended for tests and local development.
    Production should use Alembic migrations instead.

    Args:
        engine: Async SQLAlchemy engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all repositories sharing one session."""

    users: UserRepository
    content: ContentItemRepository
    relationships: RelationshipRepository


def build_repos(session: AsyncSession) -> RepoBundle:
    """Build a ``RepoBundle`` bound to ``session``.

    Args:
        session: Async session shared by the repositories

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        users=UserRepository(session),
        content=ContentItemRepository(session),
        relationships=RelationshipRepository(session),
    )
