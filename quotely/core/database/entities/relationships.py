"""
Relationship entity models.

A relationship record links a user to a content item for one kind
(favorite or like). The composite primary key ``(user_id, item_id, kind)``
guarantees at most one record per triple; the toggle engine relies on the
store rejecting a duplicate insert.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


class RelationshipRecord(Base, table=True):
    """Per-user favorite or like of a content item.

    Table: user_relationships
    """

    __tablename__ = "user_relationships"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    item_id: int = Field(foreign_key="content_items.id", primary_key=True)
    kind: str = Field(max_length=16, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)

    def __repr__(self) -> str:
        return f"RelationshipRecord(user_id={self.user_id}, item_id={self.item_id}, kind={self.kind})"
