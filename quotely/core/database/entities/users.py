"""
User entity models.

This module contains the database entity for accounts. Users are never
physically deleted; deactivation flips ``status``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from quotely.core.models.domain.enums import AccountStatus, UserRole

from ..base import Base, utc_now

EMAIL_MAX_LENGTH = 320
NAME_MAX_LENGTH = 128


class User(Base, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=EMAIL_MAX_LENGTH, unique=True, index=True)
    name: str = Field(max_length=NAME_MAX_LENGTH)
    password_hash: str = Field(max_length=128)
    role: str = Field(default=UserRole.user.value, max_length=16)
    status: str = Field(default=AccountStatus.active.value, max_length=16, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.active.value

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role}, status={self.status})"
