"""
Content item repository implementation.

This module provides data access operations for quotes and proverbs:
creation, lookup, conditional status updates and the filtered, ordered
queries the query composer pages through. It knows nothing about who is
asking; visibility is decided by the callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from sqlalchemy import and_, case, func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from quotely.core.errors import NotFound
from quotely.core.models.domain.enums import ContentKind, ContentSort, RelationshipKind

from ..entities.content_items import ContentItem
from ..entities.relationships import RelationshipRecord
from .base import AsyncBaseRepository, QueryBuilder


@dataclass(frozen=True)
class ContentCriteria:
    """Row filters for content queries.

    ``statuses`` of None means every status.
    """

    statuses: Optional[Sequence[str]] = None
    kind: Optional[str] = None
    category: Optional[str] = None
    origin: Optional[str] = None
    search: Optional[str] = None


def _author_or_origin(pattern: str):
    # Quotes keep their author in ``secondary``; proverbs keep their meaning there.
    return or_(
        ContentItem.origin.ilike(pattern, escape="\\"),
        and_(
            ContentItem.kind == ContentKind.quote.value,
            ContentItem.secondary.ilike(pattern, escape="\\"),
        ),
    )


def _attribution():
    # The author of a quote, the origin of a proverb.
    return case(
        (ContentItem.kind == ContentKind.quote.value, ContentItem.secondary),
        else_=ContentItem.origin,
    )


def _like_counts():
    return (
        select(RelationshipRecord.item_id, func.count().label("likes"))
        .where(RelationshipRecord.kind == RelationshipKind.like.value)
        .group_by(RelationshipRecord.item_id)
        .subquery()
    )


class ContentItemRepository(AsyncBaseRepository[ContentItem]):
    """Repository for content item data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ContentItem)

    async def create(self, item: ContentItem) -> ContentItem:
        """Create a new content item.

        Args:
            item: ContentItem SQLModel instance

        Returns:
            Persisted ContentItem with generated id and timestamp
        """
        return await self._persist(item, "Content item could not be stored")

    async def get_by_id(self, item_id: int) -> Optional[ContentItem]:
        return await self.session.get(ContentItem, item_id)

    async def update_status(
        self,
        item_id: int,
        new_status: str,
        *,
        expected_status: Optional[str] = None,
    ) -> Optional[ContentItem]:
        """Set the moderation status of an item.

        With ``expected_status`` the write is a single conditional UPDATE, so
        of two concurrent writers expecting the same status only one succeeds.

        Args:
            item_id: Content item ID
            new_status: Status to store
            expected_status: Status the row must currently have

        Returns:
            The updated item, or None if the row was not in ``expected_status``

        Raises:
            NotFound: If no item has this id
        """
        stmt = update(ContentItem).where(ContentItem.id == item_id)
        if expected_status is not None:
            stmt = stmt.where(ContentItem.status == expected_status)
        stmt = stmt.values(status=new_status).execution_options(synchronize_session=False)

        result = await self.session.execute(stmt)
        await self.session.commit()

        item = await self.session.get(ContentItem, item_id, populate_existing=True)
        if item is None:
            raise NotFound("Content item", item_id)
        if result.rowcount == 0:
            return None
        return item

    def _filtered(self, criteria: ContentCriteria):
        stmt = select(ContentItem)
        if criteria.statuses is not None:
            stmt = stmt.where(ContentItem.status.in_(list(criteria.statuses)))
        if criteria.kind:
            stmt = stmt.where(ContentItem.kind == criteria.kind)
        if criteria.category:
            stmt = stmt.where(ContentItem.category == criteria.category)
        if criteria.origin:
            stmt = stmt.where(_author_or_origin(QueryBuilder.like_pattern(criteria.origin)))
        if criteria.search:
            pattern = QueryBuilder.like_pattern(criteria.search)
            stmt = stmt.where(
                or_(
                    ContentItem.body.ilike(pattern, escape="\\"),
                    _author_or_origin(pattern),
                )
            )
        return stmt

    async def list(
        self,
        criteria: ContentCriteria,
        *,
        sort: ContentSort = ContentSort.created_at,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ContentItem]:
        """List items matching ``criteria`` in a deterministic order.

        Args:
            criteria: Row filters
            sort: Sort key; ties are always broken by id
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            List of ContentItem instances
        """
        stmt = self._filtered(criteria)
        if sort is ContentSort.author:
            stmt = stmt.order_by(_attribution().asc(), ContentItem.id.asc())
        elif sort is ContentSort.popular:
            likes = _like_counts()
            stmt = stmt.outerjoin(likes, likes.c.item_id == ContentItem.id).order_by(
                func.coalesce(likes.c.likes, 0).desc(), ContentItem.id.desc()
            )
        elif sort is ContentSort.category:
            stmt = stmt.order_by(ContentItem.category.asc(), ContentItem.id.asc())
        else:
            stmt = stmt.order_by(ContentItem.created_at.desc(), ContentItem.id.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, criteria: ContentCriteria) -> int:
        """Count items matching ``criteria``."""
        result = await self.session.execute(QueryBuilder.count_of(self._filtered(criteria)))
        return int(result.scalar_one())

    async def count_by_submitter(self, user_id: int) -> int:
        """Count every item submitted by a user, whatever its status."""
        stmt = select(func.count()).select_from(ContentItem).where(ContentItem.submitter_id == user_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def random(self, criteria: ContentCriteria) -> Optional[ContentItem]:
        """Pick one random item matching ``criteria``."""
        stmt = self._filtered(criteria).order_by(func.random()).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def nth(self, criteria: ContentCriteria, index: int) -> Optional[ContentItem]:
        """Return the matching item at ``index`` in id order, or None past the end."""
        stmt = self._filtered(criteria).order_by(ContentItem.id.asc()).offset(index).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def categories(self, criteria: ContentCriteria) -> List[str]:
        """Distinct, sorted, non-empty categories among matching items."""
        filtered = self._filtered(criteria).where(ContentItem.category.is_not(None)).subquery()
        stmt = select(filtered.c.category).distinct().order_by(filtered.c.category)
        result = await self.session.execute(stmt)
        return [category for category in result.scalars().all() if category]
