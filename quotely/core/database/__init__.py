"""
Centralized database layer for Quotely.

Structure:
- entities/: SQLModel table models (users, content items, relationships)
- repositories/: Async data access layer, one repository per table
- session.py: ``Database`` owning the engine and session factory
- utils.py: Engine, session factory and repository bundle helpers
"""

from .base import Base, utc_now
from .session import Database
from .utils import RepoBundle, build_repos, create_all, create_engine, create_sessionmaker

__all__ = [
    "Base",
    "Database",
    "RepoBundle",
    "build_repos",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "utc_now",
]
