"""
Query composer for content listings.

Turns a ``ContentQuery`` plus the viewer into repository criteria. The
visibility rule lives here and nowhere else: viewers who are not active
administrators only ever see approved items.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional

from quotely.core.database.entities.content_items import ContentItem
from quotely.core.database.entities.users import User
from quotely.core.database.repositories.content_items import ContentCriteria
from quotely.core.database.utils import RepoBundle
from quotely.core.errors import Forbidden, NotFound, ValidationError
from quotely.core.models.domain.enums import ContentKind, ModerationStatus, RelationshipKind
from quotely.core.models.domain.models import ContentQuery, Page
from quotely.core.models.io.content import ContentItemRead

from .access import is_privileged

STATUS_ALL = "all"
APPROVED_ONLY = (ModerationStatus.approved.value,)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class QueryComposer:
    """Builds visibility-aware, paginated content listings."""

    def __init__(self, repos: RepoBundle, *, default_page_size: int = 20, max_page_size: int = 100) -> None:
        self.repos = repos
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def visible_statuses(self, requested: Optional[str], viewer: Optional[User]) -> Optional[tuple[str, ...]]:
        """
        Resolve the ``status`` filter for ``viewer``.

        Returns:
            Statuses to include, or None for every status

        Raises:
            ValidationError: If ``requested`` is not a known status or ``all``
            Forbidden: If a non-administrator asks for anything but approved
        """
        requested = _clean(requested)
        if requested is None:
            return APPROVED_ONLY
        requested = requested.lower()
        if requested != STATUS_ALL and requested not in ModerationStatus.__members__:
            raise ValidationError(f"Unknown status filter '{requested}'", field="status")
        if requested == ModerationStatus.approved.value:
            return APPROVED_ONLY
        if not is_privileged(viewer):
            raise Forbidden(f"list {requested} content")
        return None if requested == STATUS_ALL else (requested,)

    def page_size_for(self, requested: Optional[int]) -> int:
        if requested is None:
            return self.default_page_size
        if requested < 1:
            raise ValidationError("Page size must be at least 1", field="limit")
        return min(requested, self.max_page_size)

    async def list(self, query: ContentQuery, viewer: Optional[User] = None) -> Page[ContentItemRead]:
        """
        List one page of content visible to ``viewer``.

        A page past the end is empty but still reports the full total.
        """
        if query.page < 1:
            raise ValidationError("Page must be at least 1", field="page")
        page_size = self.page_size_for(query.page_size)
        criteria = ContentCriteria(
            statuses=self.visible_statuses(query.status, viewer),
            kind=query.kind.value if query.kind else None,
            category=_clean(query.category),
            origin=_clean(query.origin),
            search=_clean(query.search),
        )

        total = await self.repos.content.count(criteria)
        items = await self.repos.content.list(
            criteria,
            sort=query.sort,
            limit=page_size,
            offset=(query.page - 1) * page_size,
        )
        return Page(
            items=await self.to_read_models(items, viewer),
            total_count=total,
            page=query.page,
            page_size=page_size,
        )

    async def get(self, item_id: int, viewer: Optional[User] = None) -> ContentItemRead:
        """Fetch one item the viewer may see, else raise ``NotFound``."""
        item = await self.repos.content.get_by_id(item_id)
        if item is None or (item.status != ModerationStatus.approved.value and not is_privileged(viewer)):
            raise NotFound("Content item", item_id)
        return (await self.to_read_models([item], viewer))[0]

    async def random(self, viewer: Optional[User] = None, kind: Optional[ContentKind] = None) -> ContentItemRead:
        """Pick a random approved item."""
        criteria = ContentCriteria(statuses=APPROVED_ONLY, kind=kind.value if kind else None)
        item = await self.repos.content.random(criteria)
        if item is None:
            raise NotFound("Content item", "random")
        return (await self.to_read_models([item], viewer))[0]

    async def daily(
        self,
        viewer: Optional[User] = None,
        kind: Optional[ContentKind] = None,
        day: Optional[date] = None,
    ) -> ContentItemRead:
        """
        Pick the item of the day.

        Every caller gets the same approved item for a given UTC day. The pick
        moves when items are approved, since it indexes the current set by id.
        """
        day = day or datetime.now(timezone.utc).date()
        criteria = ContentCriteria(statuses=APPROVED_ONLY, kind=kind.value if kind else None)
        total = await self.repos.content.count(criteria)
        item = await self.repos.content.nth(criteria, day.toordinal() % total) if total else None
        if item is None:
            raise NotFound("Content item", f"daily {day.isoformat()}")
        return (await self.to_read_models([item], viewer))[0]

    async def categories(self, kind: Optional[ContentKind] = None) -> List[str]:
        """Sorted distinct categories among approved items."""
        criteria = ContentCriteria(statuses=APPROVED_ONLY, kind=kind.value if kind else None)
        return await self.repos.content.categories(criteria)

    async def to_read_models(self, items: List[ContentItem], viewer: Optional[User]) -> List[ContentItemRead]:
        """Convert entities with their like counts, flagging the viewer's likes and favorites."""
        if not items:
            return []

        ids = [item.id for item in items]
        likes = await self.repos.relationships.count_by_item(ids, RelationshipKind.like.value)
        if viewer is None:
            return [ContentItemRead.from_entity(item, likes_count=likes.get(item.id, 0)) for item in items]

        liked = await self.repos.relationships.existing_item_ids(viewer.id, ids, RelationshipKind.like.value)
        favorited = await self.repos.relationships.existing_item_ids(viewer.id, ids, RelationshipKind.favorite.value)
        return [
            ContentItemRead.from_entity(
                item,
                likes_count=likes.get(item.id, 0),
                is_liked=item.id in liked,
                is_favorited=item.id in favorited,
            )
            for item in items
        ]
