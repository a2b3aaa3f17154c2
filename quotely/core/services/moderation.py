"""
Moderation state machine.

An item is submitted ``pending`` and moves exactly once to ``approved`` or
``rejected``. The move is a compare-and-set on ``status = 'pending'`` so two
concurrent decisions cannot both succeed.
"""

from __future__ import annotations

from typing import List, Optional

from quotely.core.database.entities.content_items import (
    CATEGORY_MAX_LENGTH,
    ORIGIN_MAX_LENGTH,
    ContentItem,
    normalize_tags,
)
from quotely.core.database.utils import RepoBundle
from quotely.core.errors import InvalidTransition, NotFound, ValidationError
from quotely.core.logging_config import get_logger
from quotely.core.models.domain.enums import ContentKind, ModerationStatus
from quotely.core.notifications import (
    CONTENT_MODERATED,
    CONTENT_SUBMITTED,
    ChangeNotifier,
    LoggingChangeNotifier,
    notify,
)

from .access import require_admin

logger = get_logger(__name__)

DECISIONS = (ModerationStatus.approved.value, ModerationStatus.rejected.value)


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _kind(kind: ContentKind | str) -> ContentKind:
    try:
        return ContentKind(kind)
    except ValueError as exc:
        raise ValidationError(f"Unknown content kind '{kind}'", field="kind") from exc


def _bounded_text(value: Optional[str], limit: int, field: str) -> Optional[str]:
    text = _optional_text(value)
    if text is not None and len(text) > limit:
        raise ValidationError(f"{field.capitalize()} must be at most {limit} characters", field=field)
    return text


class ModerationService:
    """Submission and review of content items."""

    def __init__(self, repos: RepoBundle, notifier: Optional[ChangeNotifier] = None) -> None:
        self.repos = repos
        self.notifier = notifier or LoggingChangeNotifier()

    async def submit(
        self,
        *,
        body: str,
        submitter_id: int,
        kind: ContentKind | str = ContentKind.quote,
        secondary: Optional[str] = None,
        category: Optional[str] = None,
        origin: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> ContentItem:
        """
        Store a new item awaiting review.

        Args:
            body: Quote or proverb text
            submitter_id: Submitting user
            kind: Content kind
            secondary: Author of a quote, meaning of a proverb
            category: Category name
            origin: Culture or language of origin
            tags: Free-form tags, stripped and de-duplicated

        Returns:
            The persisted item in ``pending``

        Raises:
            ValidationError: If the body is blank, the kind is unknown, a quote
                has no author or a field is too long
        """
        text = (body or "").strip()
        if not text:
            raise ValidationError("Content body is required", field="body")
        kind = _kind(kind)
        secondary = _optional_text(secondary)
        if kind is ContentKind.quote and secondary is None:
            raise ValidationError("A quote needs an author", field="secondary")

        item = ContentItem(
            kind=kind.value,
            body=text,
            secondary=secondary,
            category=_bounded_text(category, CATEGORY_MAX_LENGTH, "category"),
            origin=_bounded_text(origin, ORIGIN_MAX_LENGTH, "origin"),
            submitter_id=submitter_id,
            status=ModerationStatus.pending.value,
        )
        item.set_tags_list(normalize_tags(tags))
        item = await self.repos.content.create(item)

        logger.info(f"Content item {item.id} submitted by user {submitter_id}")
        notify(self.notifier, CONTENT_SUBMITTED, {"item_id": item.id, "submitter_id": submitter_id})
        return item

    async def set_status(self, item_id: int, new_status: str, actor_id: int) -> ContentItem:
        """
        Record a moderation decision.

        Raises:
            Forbidden: If the actor is not an active administrator
            InvalidTransition: If ``new_status`` is not a decision or the item
                was already decided
            NotFound: If the item does not exist
        """
        actor = await self.repos.users.get_by_id(actor_id)
        require_admin(actor, "moderate content")

        requested = (new_status or "").strip().lower()
        if requested not in DECISIONS:
            raise InvalidTransition(None, new_status)

        current = await self.repos.content.get_by_id(item_id)
        if current is None:
            raise NotFound("Content item", item_id)
        if ModerationStatus(current.status).is_terminal:
            raise InvalidTransition(current.status, requested)

        item = await self.repos.content.update_status(
            item_id, requested, expected_status=ModerationStatus.pending.value
        )
        if item is None:
            # The failed update refreshed ``current`` from the store.
            raise InvalidTransition(current.status, requested)

        logger.info(f"Content item {item_id} {requested} by user {actor_id}")
        notify(
            self.notifier,
            CONTENT_MODERATED,
            {"item_id": item_id, "status": requested, "actor_id": actor_id},
        )
        return item
