"""
Schema models for content item API requests and responses.

``ContentItemRead.from_entity`` is the one place entities become read
models; it decodes tags and fills the interaction flags.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from quotely.core.database.entities.content_items import CATEGORY_MAX_LENGTH, ORIGIN_MAX_LENGTH, ContentItem
from quotely.core.models.domain.enums import ContentKind

from .common import Pagination


class ContentCreate(BaseModel):
    """Schema for submitting a quote or proverb."""

    body: str = Field(description="Quote or proverb text", examples=["Well begun is half done."])
    secondary: Optional[str] = Field(
        default=None, description="Author for quotes, meaning or translation for proverbs", examples=["Aristotle"]
    )
    kind: ContentKind = Field(default=ContentKind.quote, description="Content kind")
    category: Optional[str] = Field(
        default=None, max_length=CATEGORY_MAX_LENGTH, description="Category name", examples=["wisdom"]
    )
    origin: Optional[str] = Field(
        default=None, max_length=ORIGIN_MAX_LENGTH, description="Culture or language of origin", examples=["Greek"]
    )
    tags: List[str] = Field(default_factory=list, description="Free-form tags")


class StatusUpdate(BaseModel):
    """Schema for a moderation decision."""

    status: str = Field(description="Either 'approved' or 'rejected'", examples=["approved"])


class ContentItemRead(BaseModel):
    """Schema for reading a content item."""

    id: int
    kind: str
    body: str
    secondary: Optional[str] = None
    category: Optional[str] = None
    origin: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    submitter_id: Optional[int] = None
    status: str
    created_at: datetime
    likes_count: int = 0
    is_liked: bool = False
    is_favorited: bool = False

    @classmethod
    def from_entity(
        cls,
        item: ContentItem,
        *,
        likes_count: int = 0,
        is_liked: bool = False,
        is_favorited: bool = False,
    ) -> "ContentItemRead":
        return cls(
            id=item.id,
            kind=item.kind,
            body=item.body,
            secondary=item.secondary,
            category=item.category,
            origin=item.origin,
            tags=item.get_tags_list(),
            submitter_id=item.submitter_id,
            status=item.status,
            created_at=item.created_at,
            likes_count=likes_count,
            is_liked=is_liked,
            is_favorited=is_favorited,
        )


class ContentItemResponse(BaseModel):
    item: ContentItemRead
    message: Optional[str] = None


class ContentListResponse(BaseModel):
    items: List[ContentItemRead]
    pagination: Pagination


class CategoriesResponse(BaseModel):
    categories: List[str]
