"""
User repository implementation.

This module provides data access operations for accounts. Emails are stored
lower-cased so lookups and the unique index agree.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.users import User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User SQLModel instance

        Returns:
            Persisted User with generated fields

        Raises:
            Conflict: If a user with the same email already exists
        """
        user.email = user.email.lower()
        return await self._persist(user, "A user with this email already exists")

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive).

        Args:
            email: Email address

        Returns:
            User instance or None
        """
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, user: User) -> User:
        """Persist changes made to a user.

        Args:
            user: User instance with updated fields

        Returns:
            Updated User instance
        """
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user
