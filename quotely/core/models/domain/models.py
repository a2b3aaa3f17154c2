"""Domain models passed between services and the server layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from .enums import ContentKind, ContentSort, ToggleAction

ItemType = TypeVar("ItemType")


class VerifiedIdentity(BaseModel):
    """Identity asserted by a verified bearer token."""

    user_id: int
    email: str


class ContentQuery(BaseModel):
    """
    Filters and paging for a content listing.

    Values are validated by the query composer, which caps ``page_size`` and
    decides which statuses the viewer may see.
    """

    page: int = 1
    page_size: Optional[int] = None
    category: Optional[str] = None
    origin: Optional[str] = None
    search: Optional[str] = None
    status: Optional[str] = None
    kind: Optional[ContentKind] = None
    sort: ContentSort = ContentSort.created_at


class ToggleResult(BaseModel):
    """Outcome of a relationship toggle."""

    action: ToggleAction


@dataclass(frozen=True)
class Page(Generic[ItemType]):
    """One page of an ordered result set."""

    items: List[ItemType] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 20

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size else 0
