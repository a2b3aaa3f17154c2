"""Role checks shared by the services."""

from __future__ import annotations

from typing import Optional

from quotely.core.database.entities.users import User
from quotely.core.errors import Forbidden


def is_privileged(user: Optional[User]) -> bool:
    """Whether ``user`` is an active administrator."""
    return user is not None and user.is_admin and user.is_active


def require_admin(user: Optional[User], action: str) -> User:
    """Return ``user`` if it is an active administrator, else raise ``Forbidden``."""
    if not is_privileged(user):
        raise Forbidden(action)
    return user
