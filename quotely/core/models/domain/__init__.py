"""Domain models and enums for Quotely."""

from __future__ import annotations

from .enums import (
    AccountStatus,
    ContentKind,
    ContentSort,
    ModerationStatus,
    RelationshipKind,
    ToggleAction,
    UserRole,
)
from .models import ContentQuery, Page, ToggleResult, VerifiedIdentity

__all__ = [
    "AccountStatus",
    "ContentKind",
    "ContentQuery",
    "ContentSort",
    "ModerationStatus",
    "Page",
    "RelationshipKind",
    "ToggleAction",
    "ToggleResult",
    "UserRole",
    "VerifiedIdentity",
]
