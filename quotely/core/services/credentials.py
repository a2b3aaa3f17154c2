"""
Credential store.

Registers accounts, checks passwords and resolves bearer tokens back to
users. Password hashing runs in a worker thread because bcrypt is
deliberately slow.
"""

from __future__ import annotations

import asyncio
import re
from typing import Optional, Tuple

import bcrypt

from quotely.core.database.entities.users import NAME_MAX_LENGTH, User
from quotely.core.database.utils import RepoBundle
from quotely.core.errors import (
    AccountInactive,
    Conflict,
    InvalidCredentials,
    NotFound,
    UserNotFound,
    ValidationError,
)
from quotely.core.logging_config import get_logger
from quotely.core.models.domain.enums import AccountStatus, RelationshipKind, UserRole
from quotely.core.models.domain.models import VerifiedIdentity
from quotely.core.models.io.users import UserStatsRead

from .access import require_admin
from .tokens import TokenIssuer

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def _normalize_email(email: str) -> str:
    normalized = (email or "").strip().lower()
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError("A valid email address is required", field="email")
    return normalized


def _check_password_shape(password: str) -> bytes:
    if not password:
        raise ValidationError("Password is required", field="password")
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes", field="password")
    return encoded


def _display_name(name: Optional[str]) -> str:
    display_name = (name or "").strip()
    if not display_name:
        raise ValidationError("Name is required", field="name")
    if len(display_name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Name must be at most {NAME_MAX_LENGTH} characters", field="name")
    return display_name


class CredentialService:
    """Account registration, authentication and token resolution."""

    def __init__(self, repos: RepoBundle, tokens: TokenIssuer, *, bcrypt_rounds: int = 10) -> None:
        self.repos = repos
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    async def hash_password(self, password: str) -> str:
        encoded = _check_password_shape(password)
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        hashed = await asyncio.to_thread(bcrypt.hashpw, encoded, salt)
        return hashed.decode("utf-8")

    @staticmethod
    async def password_matches(password: str, password_hash: str) -> bool:
        encoded = password.encode("utf-8")
        if not encoded or len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return await asyncio.to_thread(bcrypt.checkpw, encoded, password_hash.encode("utf-8"))
        except ValueError:
            # Stored hash is not a bcrypt hash.
            logger.warning("Stored password hash has an unexpected format")
            return False

    async def register(self, email: str, password: str, name: str) -> Tuple[User, str]:
        """
        Create an account and issue its first token.

        Args:
            email: Login email, compared case-insensitively
            password: Plain-text password
            name: Display name

        Returns:
            The new user and a bearer token

        Raises:
            ValidationError: If a field is missing or malformed
            Conflict: If the email is already registered
        """
        normalized = _normalize_email(email)
        display_name = _display_name(name)
        password_hash = await self.hash_password(password)

        if await self.repos.users.get_by_email(normalized) is not None:
            raise Conflict("A user with this email already exists")

        user = await self.repos.users.create(
            User(
                email=normalized,
                name=display_name,
                password_hash=password_hash,
                role=UserRole.user.value,
                status=AccountStatus.active.value,
            )
        )
        logger.info(f"Registered user {user.id}")
        return user, self.tokens.issue(user.id, user.email)

    async def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        """
        Exchange an email and password for a token.

        Failed attempts are not recorded anywhere.

        Raises:
            ValidationError: If email or password is blank
            InvalidCredentials: If the email is unknown or the password is wrong
            AccountInactive: If the password is right but the account is inactive
        """
        if not (email or "").strip() or not password:
            raise ValidationError("Email and password are required")

        user = await self.repos.users.get_by_email(email)
        if user is None or not await self.password_matches(password, user.password_hash):
            raise InvalidCredentials()
        if not user.is_active:
            raise AccountInactive()

        logger.debug(f"User {user.id} authenticated")
        return user, self.tokens.issue(user.id, user.email)

    async def resolve(self, token: str) -> User:
        """
        Verify a token and load the user it names.

        Raises:
            InvalidToken: If the token is forged, expired or malformed
            UserNotFound: If the user is gone or inactive
        """
        identity = self.tokens.decode(token)
        user = await self.repos.users.get_by_id(identity.user_id)
        if user is None or not user.is_active:
            raise UserNotFound()
        return user

    async def verify(self, token: str) -> VerifiedIdentity:
        user = await self.resolve(token)
        return VerifiedIdentity(user_id=user.id, email=user.email)

    async def update_profile(self, user: User, name: str) -> User:
        """
        Change the caller's display name.

        Raises:
            ValidationError: If the name is blank or too long
        """
        user.name = _display_name(name)
        user = await self.repos.users.update(user)
        logger.info(f"User {user.id} updated their profile")
        return user

    async def set_account_status(self, user_id: int, status: str, actor: Optional[User]) -> User:
        """
        Activate or deactivate an account.

        Raises:
            Forbidden: If ``actor`` is not an active administrator
            ValidationError: If ``status`` is not a known account status
            NotFound: If the user does not exist
        """
        require_admin(actor, "change account status")
        try:
            new_status = AccountStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown account status '{status}'", field="status") from exc

        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User", user_id)
        user.status = new_status.value
        user = await self.repos.users.update(user)
        logger.info(f"User {user_id} set to {new_status.value} by {actor.id}")
        return user

    async def ensure_admin(self, email: str, password: str, name: str) -> User:
        """
        Make sure an active administrator with this email exists.

        An existing account is promoted and reactivated, its password is left
        untouched.
        """
        normalized = _normalize_email(email)
        user = await self.repos.users.get_by_email(normalized)
        if user is None:
            user = await self.repos.users.create(
                User(
                    email=normalized,
                    name=(name or "").strip() or "Administrator",
                    password_hash=await self.hash_password(password),
                    role=UserRole.admin.value,
                    status=AccountStatus.active.value,
                )
            )
            logger.info(f"Created administrator account {user.id}")
            return user

        if not (user.is_admin and user.is_active):
            user.role = UserRole.admin.value
            user.status = AccountStatus.active.value
            user = await self.repos.users.update(user)
            logger.info(f"Promoted user {user.id} to administrator")
        return user

    async def stats(self, user: User) -> UserStatsRead:
        """Count a user's favorites, likes and submissions."""
        return UserStatsRead(
            favorites=await self.repos.relationships.count_all_for_user(user.id, RelationshipKind.favorite.value),
            likes=await self.repos.relationships.count_all_for_user(user.id, RelationshipKind.like.value),
            submissions=await self.repos.content.count_by_submitter(user.id),
        )
