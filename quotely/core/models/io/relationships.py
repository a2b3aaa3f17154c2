"""Schema models for favorite and like API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from quotely.core.database.entities.content_items import ContentItem
from quotely.core.models.domain.enums import ToggleAction

from .common import Pagination
from .content import ContentItemRead


class ToggleRequest(BaseModel):
    """Schema for toggling a relationship."""

    item_id: int = Field(alias="itemId", description="Content item to toggle")

    model_config = ConfigDict(populate_by_name=True)


class ToggleResponse(BaseModel):
    action: ToggleAction


class RelatedContentRead(ContentItemRead):
    """Content item plus the time the relationship was created."""

    related_at: datetime

    @classmethod
    def from_related(cls, item: ContentItem, related_at: datetime, **fields) -> "RelatedContentRead":
        read = ContentItemRead.from_entity(item, **fields)
        return cls(**read.model_dump(), related_at=related_at)


class RelationshipListResponse(BaseModel):
    items: List[RelatedContentRead]
    pagination: Pagination
