"""Unit tests for ModerationService."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from quotely.core.database import build_repos
from quotely.core.errors import Forbidden, InvalidTransition, NotFound, ValidationError
from quotely.core.models.domain.enums import AccountStatus, ContentKind, ModerationStatus, UserRole
from quotely.core.notifications import CONTENT_MODERATED, CONTENT_SUBMITTED
from quotely.core.services import ModerationService

pytestmark = pytest.mark.asyncio


class TestSubmit:
    async def test_submission_is_pending(self, moderation, make_user, notifier):
        user = await make_user()
        item = await moderation.submit(
            body="  Well begun is half done. ",
            secondary="Aristotle",
            submitter_id=user.id,
            category="motivation",
            tags=["start", " start", "habits", ""],
        )

        assert item.status == ModerationStatus.pending.value
        assert item.body == "Well begun is half done."
        assert item.submitter_id == user.id
        assert item.get_tags_list() == ["start", "habits"]
        assert notifier.names == [CONTENT_SUBMITTED]

    async def test_blank_body_rejected(self, moderation, make_user):
        user = await make_user()
        with pytest.raises(ValidationError) as exc_info:
            await moderation.submit(body="   ", secondary="Someone", submitter_id=user.id)
        assert exc_info.value.field == "body"

    async def test_quote_requires_author(self, moderation, make_user):
        user = await make_user()
        with pytest.raises(ValidationError) as exc_info:
            await moderation.submit(body="Anonymous wisdom", submitter_id=user.id)
        assert exc_info.value.field == "secondary"

    async def test_proverb_without_meaning_allowed(self, moderation, make_user):
        user = await make_user()
        item = await moderation.submit(
            body="Rome was not built in a day.", kind=ContentKind.proverb, origin="Latin", submitter_id=user.id
        )
        assert item.kind == "proverb"
        assert item.secondary is None

    async def test_unknown_kind_rejected(self, moderation, make_user):
        user = await make_user()
        with pytest.raises(ValidationError) as exc_info:
            await moderation.submit(body="Carpe diem", kind="haiku", secondary="Horace", submitter_id=user.id)
        assert exc_info.value.field == "kind"

    @pytest.mark.parametrize("field, limit", [("category", 64), ("origin", 128)])
    async def test_overlong_field_rejected(self, moderation, make_user, field, limit):
        user = await make_user()
        with pytest.raises(ValidationError) as exc_info:
            await moderation.submit(
                body="Rome was not built in a day.",
                kind=ContentKind.proverb,
                submitter_id=user.id,
                **{field: "x" * (limit + 1)},
            )
        assert exc_info.value.field == field


class TestSetStatus:
    async def test_admin_approves_pending_item(self, moderation, make_user, make_item, notifier):
        admin = await make_user(role=UserRole.admin)
        item = await make_item(status=ModerationStatus.pending)

        updated = await moderation.set_status(item.id, "approved", admin.id)
        assert updated.status == "approved"
        assert notifier.events[-1] == (
            CONTENT_MODERATED,
            {"item_id": item.id, "status": "approved", "actor_id": admin.id},
        )

    async def test_non_admin_forbidden(self, moderation, make_user, make_item):
        user = await make_user()
        item = await make_item(status=ModerationStatus.pending)
        with pytest.raises(Forbidden):
            await moderation.set_status(item.id, "approved", user.id)

    async def test_inactive_admin_forbidden(self, moderation, make_user, make_item):
        admin = await make_user(role=UserRole.admin, status=AccountStatus.inactive)
        item = await make_item(status=ModerationStatus.pending)
        with pytest.raises(Forbidden):
            await moderation.set_status(item.id, "approved", admin.id)

    async def test_unknown_actor_forbidden(self, moderation, make_item):
        item = await make_item(status=ModerationStatus.pending)
        with pytest.raises(Forbidden):
            await moderation.set_status(item.id, "approved", 999)

    @pytest.mark.parametrize("status", ["pending", "published", ""])
    async def test_non_terminal_target_is_invalid_transition(self, moderation, make_user, make_item, status):
        admin = await make_user(role=UserRole.admin)
        item = await make_item(status=ModerationStatus.pending)
        with pytest.raises(InvalidTransition):
            await moderation.set_status(item.id, status, admin.id)

    async def test_missing_item(self, moderation, make_user):
        admin = await make_user(role=UserRole.admin)
        with pytest.raises(NotFound):
            await moderation.set_status(404, "approved", admin.id)

    async def test_decided_item_is_refused_without_writing(self, moderation, repos, make_user, make_item, monkeypatch):
        admin = await make_user(role=UserRole.admin)
        item = await make_item(status=ModerationStatus.rejected)
        update_status = AsyncMock()
        monkeypatch.setattr(repos.content, "update_status", update_status)

        with pytest.raises(InvalidTransition) as exc_info:
            await moderation.set_status(item.id, "approved", admin.id)
        assert exc_info.value.current == "rejected"
        update_status.assert_not_awaited()

    @pytest.mark.parametrize("first", ["approved", "rejected"])
    @pytest.mark.parametrize("second", ["approved", "rejected"])
    async def test_terminal_states_are_final(self, moderation, repos, make_user, make_item, first, second):
        admin = await make_user(role=UserRole.admin)
        item = await make_item(status=ModerationStatus.pending)
        await moderation.set_status(item.id, first, admin.id)

        with pytest.raises(InvalidTransition) as exc_info:
            await moderation.set_status(item.id, second, admin.id)
        assert exc_info.value.current == first
        assert (await repos.content.get_by_id(item.id)).status == first

    async def test_concurrent_decisions_only_one_wins(self, database, make_user, make_item, notifier):
        admin = await make_user(role=UserRole.admin)
        item = await make_item(status=ModerationStatus.pending)

        async def decide(status):
            async with database.session() as session:
                service = ModerationService(build_repos(session), notifier)
                try:
                    return (await service.set_status(item.id, status, admin.id)).status
                except InvalidTransition:
                    return None

        results = await asyncio.gather(decide("approved"), decide("rejected"))
        winners = [r for r in results if r is not None]
        assert len(winners) == 1

        async with database.session() as session:
            stored = await build_repos(session).content.get_by_id(item.id)
        assert stored.status == winners[0]
