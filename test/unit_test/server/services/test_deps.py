"""Unit tests for the request dependency wiring."""

from types import SimpleNamespace

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from quotely.core.errors import InvalidToken, UserNotFound
from quotely.core.models.domain.enums import AccountStatus
from quotely.core.services import CredentialService, QueryComposer, RelationshipToggleEngine
from quotely.server.services import deps


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.fixture
def settings_request(test_settings):
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(settings=test_settings)))


def test_token_issuer_uses_configured_secret(settings_request, test_settings, token_issuer):
    issuer = deps.get_token_issuer(deps.get_settings(settings_request))

    token = issuer.issue(1, "a@example.com")
    assert token_issuer.decode(token).user_id == 1
    assert issuer.lifetime == test_settings.auth.token_lifetime


def test_services_use_configured_page_sizes(repos, notifier, test_settings):
    composer = deps.get_query_composer(repos, test_settings)
    engine = deps.get_toggle_engine(repos, notifier, test_settings)

    assert isinstance(composer, QueryComposer)
    assert isinstance(engine, RelationshipToggleEngine)
    assert composer.max_page_size == test_settings.pagination.max_page_size
    assert engine.max_page_size == test_settings.pagination.max_page_size


async def test_session_dependency_yields_working_session(database):
    generator = deps.get_session(database)
    session = await generator.__anext__()
    try:
        repos = deps.get_repos(session)
        assert await repos.users.get_by_email("nobody@example.com") is None
    finally:
        await generator.aclose()


class TestCurrentUser:
    async def test_missing_header_rejected(self, credentials: CredentialService):
        with pytest.raises(InvalidToken, match="Authentication required"):
            await deps.get_current_user(None, credentials)

    async def test_valid_token_resolves_user(self, credentials, make_user, issue_token):
        user = await make_user()

        resolved = await deps.get_current_user(_credentials(issue_token(user)), credentials)

        assert resolved.id == user.id

    async def test_inactive_user_rejected(self, credentials, make_user, issue_token):
        user = await make_user(status=AccountStatus.inactive)

        with pytest.raises(UserNotFound):
            await deps.get_current_user(_credentials(issue_token(user)), credentials)


class TestOptionalUser:
    async def test_no_header_is_anonymous(self, credentials):
        assert await deps.get_optional_user(None, credentials) is None

    async def test_garbage_token_is_anonymous(self, credentials):
        assert await deps.get_optional_user(_credentials("not-a-jwt"), credentials) is None

    async def test_valid_token_resolves_user(self, credentials, make_user, issue_token):
        user = await make_user()

        resolved = await deps.get_optional_user(_credentials(issue_token(user)), credentials)

        assert resolved is not None and resolved.id == user.id
