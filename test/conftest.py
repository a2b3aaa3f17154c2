"""Shared fixtures for the Quotely test suite.

Every test gets its own file-backed SQLite database under ``tmp_path`` so
concurrent sessions behave like separate connections to a real store.
"""

from __future__ import annotations

from typing import Any, AsyncGenerator, Awaitable, Callable, Optional

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from quotely.core.database import Database, RepoBundle, build_repos
from quotely.core.database.entities import ContentItem, User
from quotely.core.models.domain.enums import AccountStatus, ContentKind, ModerationStatus, UserRole
from quotely.core.services import (
    CredentialService,
    ModerationService,
    QueryComposer,
    RelationshipToggleEngine,
    TokenIssuer,
)
from quotely.server.core.config import Settings

TEST_JWT_SECRET = "quotely-test-secret"
TEST_PASSWORD = "correct horse battery staple"
# Lowest cost bcrypt accepts; keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4

_TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode(), bcrypt.gensalt(rounds=TEST_BCRYPT_ROUNDS)).decode()


class RecordingNotifier:
    """Notifier that keeps every published event in memory."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def publish(self, event: str, payload: dict[str, Any]) -> None:
        self.events.append((event, payload))

    @property
    def names(self) -> list[str]:
        return [event for event, _ in self.events]


def bearer(token: str) -> dict[str, str]:
    """Authorization header for ``token``."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'quotely-test.db'}"


@pytest.fixture
def test_settings(database_url: str) -> Settings:
    """Settings isolated from the developer's environment."""
    return Settings(
        QUOTELY_DATABASE_URL=database_url,
        QUOTELY_JWT_SECRET=TEST_JWT_SECRET,
        QUOTELY_BCRYPT_ROUNDS=TEST_BCRYPT_ROUNDS,
        QUOTELY_DEFAULT_PAGE_SIZE=20,
        QUOTELY_MAX_PAGE_SIZE=100,
        LOGFIRE_ENABLED=False,
    )


@pytest_asyncio.fixture
async def database(database_url: str) -> AsyncGenerator[Database, None]:
    """Create a fresh schema for each test."""
    db = Database(database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as db_session:
        yield db_session


@pytest.fixture
def repos(session: AsyncSession) -> RepoBundle:
    return build_repos(session)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_JWT_SECRET)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def credentials(repos: RepoBundle, token_issuer: TokenIssuer) -> CredentialService:
    return CredentialService(repos, token_issuer, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def composer(repos: RepoBundle) -> QueryComposer:
    return QueryComposer(repos)


@pytest.fixture
def moderation(repos: RepoBundle, notifier: RecordingNotifier) -> ModerationService:
    return ModerationService(repos, notifier)


@pytest.fixture
def toggle_engine(repos: RepoBundle, notifier: RecordingNotifier) -> RelationshipToggleEngine:
    return RelationshipToggleEngine(repos, notifier)


UserFactory = Callable[..., Awaitable[User]]
ItemFactory = Callable[..., Awaitable[ContentItem]]


@pytest.fixture
def make_user(repos: RepoBundle) -> UserFactory:
    """Create users directly through the repository with ``TEST_PASSWORD``."""
    counter = {"n": 0}

    async def _make(
        email: Optional[str] = None,
        *,
        role: UserRole = UserRole.user,
        status: AccountStatus = AccountStatus.active,
        name: str = "Test User",
    ) -> User:
        counter["n"] += 1
        return await repos.users.create(
            User(
                email=email or f"user{counter['n']}@example.com",
                name=name,
                password_hash=_TEST_PASSWORD_HASH,
                role=role.value,
                status=status.value,
            )
        )

    return _make


@pytest.fixture
def make_item(repos: RepoBundle) -> ItemFactory:
    """Create content items directly through the repository."""

    async def _make(
        body: str = "Well begun is half done.",
        *,
        kind: ContentKind = ContentKind.quote,
        secondary: Optional[str] = "Aristotle",
        category: Optional[str] = None,
        origin: Optional[str] = None,
        tags: Optional[list[str]] = None,
        status: ModerationStatus = ModerationStatus.approved,
        submitter_id: Optional[int] = None,
    ) -> ContentItem:
        item = ContentItem(
            kind=kind.value,
            body=body,
            secondary=secondary,
            category=category,
            origin=origin,
            status=status.value,
            submitter_id=submitter_id,
        )
        item.set_tags_list(tags)
        return await repos.content.create(item)

    return _make


@pytest.fixture
def app(test_settings: Settings, database: Database):
    """Application wired to the test database.

    ASGITransport does not run the lifespan, so the database is attached here.
    """
    from quotely.server.main import create_app

    application = create_app(test_settings)
    application.state.database = database
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as http_client:
        yield http_client


@pytest.fixture
def issue_token(token_issuer: TokenIssuer) -> Callable[[User], str]:
    def _issue(user: User) -> str:
        return token_issuer.issue(user.id, user.email)

    return _issue
