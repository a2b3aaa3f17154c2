"""
Relationship repository implementation.

This module provides data access operations for favorite and like records.
The composite primary key is the only guard against duplicates: a second
insert for the same ``(user_id, item_id, kind)`` surfaces as ``Conflict``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.util import identity_key
from sqlmodel import select

from quotely.core.models.domain.enums import ModerationStatus

from ..entities.content_items import ContentItem
from ..entities.relationships import RelationshipRecord
from .base import AsyncBaseRepository, QueryBuilder


class RelationshipRepository(AsyncBaseRepository[RelationshipRecord]):
    """Repository for relationship record data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RelationshipRecord)

    async def create(self, record: RelationshipRecord) -> RelationshipRecord:
        """Insert a relationship record.

        The record is not refreshed after the commit: its key and timestamp are
        set client-side, and a concurrent toggle may already have removed it.

        Args:
            record: RelationshipRecord SQLModel instance

        Returns:
            Persisted RelationshipRecord

        Raises:
            Conflict: If the same triple already exists
        """
        return await self._persist(record, "Relationship already exists", refresh=False)

    async def get_by_id(self, entity_id: Tuple[int, int, str]) -> Optional[RelationshipRecord]:
        """Get a record by its composite key ``(user_id, item_id, kind)``."""
        user_id, item_id, kind = entity_id
        return await self.get(user_id, item_id, kind)

    async def get(self, user_id: int, item_id: int, kind: str) -> Optional[RelationshipRecord]:
        """Fetch the record for a triple straight from the store.

        The identity map is bypassed so a row removed by another session is
        never reported as present.
        """
        stmt = (
            select(RelationshipRecord)
            .where(RelationshipRecord.user_id == user_id)
            .where(RelationshipRecord.item_id == item_id)
            .where(RelationshipRecord.kind == kind)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        record = result.scalars().first()
        if record is None:
            # Drop an instance another session deleted so a re-insert does not clash with it.
            stale = self.session.identity_map.get(identity_key(RelationshipRecord, (user_id, item_id, kind)))
            if stale is not None:
                self.session.expunge(stale)
        return record

    async def delete(self, user_id: int, item_id: int, kind: str) -> bool:
        """Delete the record for a triple.

        Returns:
            True if a row was removed, False if none existed
        """
        stmt = (
            delete(RelationshipRecord)
            .where(RelationshipRecord.user_id == user_id)
            .where(RelationshipRecord.item_id == item_id)
            .where(RelationshipRecord.kind == kind)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _joined(self, user_id: int, kind: str):
        return (
            select(ContentItem, RelationshipRecord.created_at)
            .join(RelationshipRecord, RelationshipRecord.item_id == ContentItem.id)
            .where(RelationshipRecord.user_id == user_id)
            .where(RelationshipRecord.kind == kind)
            .where(ContentItem.status == ModerationStatus.approved.value)
        )

    async def list_for_user(
        self,
        user_id: int,
        kind: str,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Tuple[ContentItem, datetime]]:
        """List approved items a user related to, newest relationship first.

        Args:
            user_id: Owner of the relationships
            kind: Relationship kind
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            ``(item, related_at)`` pairs
        """
        stmt = self._joined(user_id, kind).order_by(
            RelationshipRecord.created_at.desc(), ContentItem.id.desc()
        )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return [(item, related_at) for item, related_at in result.all()]

    async def count_for_user(self, user_id: int, kind: str) -> int:
        """Count approved items a user related to."""
        result = await self.session.execute(QueryBuilder.count_of(self._joined(user_id, kind)))
        return int(result.scalar_one())

    async def count_all_for_user(self, user_id: int, kind: str) -> int:
        """Count every record of a kind a user holds, whatever the item status."""
        stmt = (
            select(func.count())
            .select_from(RelationshipRecord)
            .where(RelationshipRecord.user_id == user_id)
            .where(RelationshipRecord.kind == kind)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def existing_item_ids(self, user_id: int, item_ids: Iterable[int], kind: str) -> Set[int]:
        """Return which of ``item_ids`` the user holds a record of ``kind`` for."""
        ids = list(item_ids)
        if not ids:
            return set()
        stmt = (
            select(RelationshipRecord.item_id)
            .where(RelationshipRecord.user_id == user_id)
            .where(RelationshipRecord.kind == kind)
            .where(RelationshipRecord.item_id.in_(ids))
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def count_by_item(self, item_ids: Iterable[int], kind: str) -> Dict[int, int]:
        """Count records of ``kind`` per item, across all users.

        Items without records are absent from the result.
        """
        ids = list(item_ids)
        if not ids:
            return {}
        stmt = (
            select(RelationshipRecord.item_id, func.count())
            .where(RelationshipRecord.kind == kind)
            .where(RelationshipRecord.item_id.in_(ids))
            .group_by(RelationshipRecord.item_id)
        )
        result = await self.session.execute(stmt)
        return {item_id: int(count) for item_id, count in result.all()}
