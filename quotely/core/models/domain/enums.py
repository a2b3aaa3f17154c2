"""Domain enums for Quotely models."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Role of an account; only ``admin`` may moderate."""

    user = "user"
    admin = "admin"


class AccountStatus(str, Enum):
    """Whether an account may authenticate."""

    active = "active"
    inactive = "inactive"


class ContentKind(str, Enum):
    """Kind of content item."""

    quote = "quote"
    proverb = "proverb"


class ModerationStatus(str, Enum):
    """
    Review lifecycle of a content item.

    ``pending`` is the only non-terminal state.
    """

    pending = "pending"
    approved = "approved"
    rejected = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ModerationStatus.pending


class RelationshipKind(str, Enum):
    """Per-user relationship to a content item."""

    favorite = "favorite"
    like = "like"


class ToggleAction(str, Enum):
    """Outcome of a relationship toggle."""

    added = "added"
    removed = "removed"


class ContentSort(str, Enum):
    """Stable sort keys accepted by content listings."""

    created_at = "created_at"
    author = "author"
    category = "category"
    popular = "popular"
