"""
Relationship toggle engine.

Favorites and likes are per-user toggles over one table keyed by
``(user_id, item_id, kind)``. The engine never locks: it reads the current
record and deletes or inserts. When concurrent toggles all see "absent", the
primary key lets exactly one insert through and the others get ``Conflict``,
which is reported as ``added`` because the record now exists.
"""

from __future__ import annotations

from typing import Optional

from quotely.core.database.entities.relationships import RelationshipRecord
from quotely.core.database.utils import RepoBundle
from quotely.core.errors import Conflict, NotFound, ValidationError
from quotely.core.logging_config import get_logger
from quotely.core.models.domain.enums import ModerationStatus, RelationshipKind, ToggleAction
from quotely.core.models.domain.models import Page, ToggleResult
from quotely.core.models.io.relationships import RelatedContentRead
from quotely.core.notifications import (
    RELATIONSHIP_ADDED,
    RELATIONSHIP_REMOVED,
    ChangeNotifier,
    LoggingChangeNotifier,
    notify,
)

logger = get_logger(__name__)


def _kind(kind: RelationshipKind | str) -> RelationshipKind:
    try:
        return RelationshipKind(kind)
    except ValueError as exc:
        raise ValidationError(f"Unknown relationship kind '{kind}'", field="kind") from exc


class RelationshipToggleEngine:
    """Toggles and lists a user's favorites and likes."""

    def __init__(
        self,
        repos: RepoBundle,
        notifier: Optional[ChangeNotifier] = None,
        *,
        default_page_size: int = 20,
        max_page_size: int = 100,
    ) -> None:
        self.repos = repos
        self.notifier = notifier or LoggingChangeNotifier()
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def toggle(self, user_id: int, item_id: int, kind: RelationshipKind | str) -> ToggleResult:
        """
        Flip the relationship between a user and an item.

        Args:
            user_id: Acting user
            item_id: Content item
            kind: favorite or like

        Returns:
            ``added`` if the record exists afterwards, ``removed`` otherwise

        Raises:
            NotFound: If the item does not exist or is not approved
        """
        kind = _kind(kind)
        item = await self.repos.content.get_by_id(item_id)
        if item is None or item.status != ModerationStatus.approved.value:
            raise NotFound("Content item", item_id)

        existing = await self.repos.relationships.get(user_id, item_id, kind.value)
        if existing is not None:
            # A concurrent toggle may have removed it already; the outcome is the same.
            await self.repos.relationships.delete(user_id, item_id, kind.value)
            action = ToggleAction.removed
        else:
            try:
                await self.repos.relationships.create(
                    RelationshipRecord(user_id=user_id, item_id=item_id, kind=kind.value)
                )
            except Conflict:
                logger.debug(f"Concurrent {kind.value} insert for user {user_id} item {item_id} absorbed")
            action = ToggleAction.added

        event = RELATIONSHIP_ADDED if action is ToggleAction.added else RELATIONSHIP_REMOVED
        notify(self.notifier, event, {"user_id": user_id, "item_id": item_id, "kind": kind.value})
        return ToggleResult(action=action)

    async def list(
        self,
        user_id: int,
        kind: RelationshipKind | str,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Page[RelatedContentRead]:
        """List approved items related to a user, most recent relationship first."""
        kind = _kind(kind)
        if page < 1:
            raise ValidationError("Page must be at least 1", field="page")
        if page_size is None:
            page_size = self.default_page_size
        elif page_size < 1:
            raise ValidationError("Page size must be at least 1", field="limit")
        page_size = min(page_size, self.max_page_size)

        total = await self.repos.relationships.count_for_user(user_id, kind.value)
        rows = await self.repos.relationships.list_for_user(
            user_id, kind.value, limit=page_size, offset=(page - 1) * page_size
        )
        other = RelationshipKind.like if kind is RelationshipKind.favorite else RelationshipKind.favorite
        ids = [item.id for item, _ in rows]
        also = await self.repos.relationships.existing_item_ids(user_id, ids, other.value)
        likes = await self.repos.relationships.count_by_item(ids, RelationshipKind.like.value)
        items = []
        for item, related_at in rows:
            flags = {kind: True, other: item.id in also}
            items.append(
                RelatedContentRead.from_related(
                    item,
                    related_at,
                    likes_count=likes.get(item.id, 0),
                    is_favorited=flags[RelationshipKind.favorite],
                    is_liked=flags[RelationshipKind.like],
                )
            )
        return Page(items=items, total_count=total, page=page, page_size=page_size)
