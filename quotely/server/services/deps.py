"""
Request Dependencies.

FastAPI dependencies wiring one ``AsyncSession`` per request into the
repositories and services, and resolving the bearer token to a user.
Everything is built from ``app.state``; nothing here holds a global engine.
"""

from __future__ import annotations

from typing import Annotated, AsyncIterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from quotely.core.database import Database, RepoBundle, build_repos
from quotely.core.database.entities.users import User
from quotely.core.errors import InvalidToken, QuotelyError
from quotely.core.logging_config import get_logger
from quotely.core.notifications import ChangeNotifier
from quotely.core.services import (
    CredentialService,
    ModerationService,
    QueryComposer,
    RelationshipToggleEngine,
    TokenIssuer,
)
from quotely.server.core.config import Settings

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_notifier(request: Request) -> ChangeNotifier:
    return request.app.state.notifier


async def get_session(database: Annotated[Database, Depends(get_database)]) -> AsyncIterator[AsyncSession]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session closed after the response.
    """
    async with database.session() as session:
        yield session


def get_repos(session: Annotated[AsyncSession, Depends(get_session)]) -> RepoBundle:
    return build_repos(session)


def get_token_issuer(settings: Annotated[Settings, Depends(get_settings)]) -> TokenIssuer:
    auth = settings.auth
    return TokenIssuer(auth.jwt_secret, algorithm=auth.jwt_algorithm, lifetime=auth.token_lifetime)


def get_credential_service(
    repos: Annotated[RepoBundle, Depends(get_repos)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CredentialService:
    return CredentialService(repos, tokens, bcrypt_rounds=settings.auth.bcrypt_rounds)


def get_query_composer(
    repos: Annotated[RepoBundle, Depends(get_repos)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> QueryComposer:
    pagination = settings.pagination
    return QueryComposer(
        repos,
        default_page_size=pagination.default_page_size,
        max_page_size=pagination.max_page_size,
    )


def get_moderation_service(
    repos: Annotated[RepoBundle, Depends(get_repos)],
    notifier: Annotated[ChangeNotifier, Depends(get_notifier)],
) -> ModerationService:
    return ModerationService(repos, notifier)


def get_toggle_engine(
    repos: Annotated[RepoBundle, Depends(get_repos)],
    notifier: Annotated[ChangeNotifier, Depends(get_notifier)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RelationshipToggleEngine:
    pagination = settings.pagination
    return RelationshipToggleEngine(
        repos,
        notifier,
        default_page_size=pagination.default_page_size,
        max_page_size=pagination.max_page_size,
    )


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    service: Annotated[CredentialService, Depends(get_credential_service)],
) -> User:
    """Resolve the bearer token; a missing or malformed header is ``InvalidToken``."""
    if credentials is None or not credentials.credentials:
        raise InvalidToken("Authentication required")
    return await service.resolve(credentials.credentials)


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    service: Annotated[CredentialService, Depends(get_credential_service)],
) -> Optional[User]:
    """Resolve the bearer token if one is sent; an unusable token means anonymous."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return await service.resolve(credentials.credentials)
    except QuotelyError as exc:
        logger.debug(f"Ignoring unusable token on public route: {exc.kind}")
        return None


SettingsDep = Annotated[Settings, Depends(get_settings)]
CredentialServiceDep = Annotated[CredentialService, Depends(get_credential_service)]
QueryComposerDep = Annotated[QueryComposer, Depends(get_query_composer)]
ModerationServiceDep = Annotated[ModerationService, Depends(get_moderation_service)]
ToggleEngineDep = Annotated[RelationshipToggleEngine, Depends(get_toggle_engine)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[Optional[User], Depends(get_optional_user)]
