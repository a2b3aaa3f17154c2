"""
Database repository layer using SQLModel.

Each module provides async data access operations for its SQLModel entity.
Repositories receive their ``AsyncSession`` explicitly and translate
constraint violations into ``Conflict``.

Modules:
- base: AsyncBaseRepository interface and QueryBuilder utilities
- users: Account repository operations
- content_items: Quote and proverb repository operations
- relationships: Favorite and like repository operations
"""

from .base import AsyncBaseRepository, QueryBuilder
from .content_items import ContentCriteria, ContentItemRepository
from .relationships import RelationshipRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "ContentCriteria",
    "ContentItemRepository",
    "QueryBuilder",
    "RelationshipRepository",
    "UserRepository",
]
