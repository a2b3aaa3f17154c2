"""
Content item entity models.

A content item is either a quote (``secondary`` holds the author) or a
proverb (``secondary`` holds its meaning or translation). Tags are kept as a
JSON array string.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Text

from quotely.core.models.domain.enums import ContentKind, ModerationStatus

from ..base import Base, utc_now

CATEGORY_MAX_LENGTH = 64
ORIGIN_MAX_LENGTH = 128


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Strip tags and drop blanks and duplicates, keeping first occurrence order."""
    seen: dict[str, None] = {}
    for tag in tags or []:
        cleaned = tag.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


class ContentItem(Base, table=True):
    """Persistent quote or proverb.

    Table: content_items
    """

    __tablename__ = "content_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    kind: str = Field(default=ContentKind.quote.value, max_length=16, index=True)

    body: str = Field(sa_type=Text)
    secondary: Optional[str] = Field(default=None, sa_type=Text)
    category: Optional[str] = Field(default=None, max_length=CATEGORY_MAX_LENGTH, index=True)
    origin: Optional[str] = Field(default=None, max_length=ORIGIN_MAX_LENGTH)
    tags: str = Field(default="[]", sa_type=Text, description="JSON array of tag names")

    submitter_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    status: str = Field(default=ModerationStatus.pending.value, max_length=16, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)

    def get_tags_list(self) -> List[str]:
        """Get tags as a list."""
        try:
            loaded = json.loads(self.tags) if self.tags else []
        except (json.JSONDecodeError, TypeError):
            return []
        return [tag for tag in loaded if isinstance(tag, str)]

    def set_tags_list(self, tags: Optional[List[str]]) -> None:
        """Set tags from a list, normalizing them."""
        self.tags = json.dumps(normalize_tags(tags))

    def __repr__(self) -> str:
        return f"ContentItem(id={self.id}, kind={self.kind}, status={self.status})"
