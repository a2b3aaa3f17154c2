"""
Database entity models.

Importing this package registers every table with the shared SQLModel
metadata, which ``create_all`` and the Alembic environment rely on.
"""

from .content_items import ContentItem
from .relationships import RelationshipRecord
from .users import User

__all__ = ["ContentItem", "RelationshipRecord", "User"]
