"""Unit tests for RelationshipRepository."""

import pytest

from quotely.core.database.entities import RelationshipRecord
from quotely.core.errors import Conflict
from quotely.core.models.domain.enums import ModerationStatus

pytestmark = pytest.mark.asyncio


class TestRelationshipRepository:
    async def test_create_get_delete(self, repos, make_user, make_item):
        user = await make_user()
        item = await make_item()

        await repos.relationships.create(RelationshipRecord(user_id=user.id, item_id=item.id, kind="favorite"))
        assert await repos.relationships.get(user.id, item.id, "favorite") is not None
        assert await repos.relationships.get(user.id, item.id, "like") is None
        assert await repos.relationships.get_by_id((user.id, item.id, "favorite")) is not None

        assert await repos.relationships.delete(user.id, item.id, "favorite") is True
        assert await repos.relationships.delete(user.id, item.id, "favorite") is False
        assert await repos.relationships.get(user.id, item.id, "favorite") is None

    async def test_duplicate_triple_raises_conflict(self, repos, make_user, make_item):
        user = await make_user()
        item = await make_item()
        await repos.relationships.create(RelationshipRecord(user_id=user.id, item_id=item.id, kind="like"))

        with pytest.raises(Conflict):
            await repos.relationships.create(RelationshipRecord(user_id=user.id, item_id=item.id, kind="like"))

    async def test_list_for_user_newest_first_and_approved_only(self, repos, make_user, make_item):
        user = await make_user()
        older = await make_item("older")
        newer = await make_item("newer")
        await repos.relationships.create(RelationshipRecord(user_id=user.id, item_id=older.id, kind="favorite"))
        await repos.relationships.create(RelationshipRecord(user_id=user.id, item_id=newer.id, kind="favorite"))

        rows = await repos.relationships.list_for_user(user.id, "favorite")
        assert [item.id for item, _ in rows] == [newer.id, older.id]
        assert all(related_at is not None for _, related_at in rows)
        assert await repos.relationships.count_for_user(user.id, "favorite") == 2
        assert await repos.relationships.count_for_user(user.id, "like") == 0

    async def test_list_excludes_items_that_are_not_approved(self, repos, make_user, make_item):
        user = await make_user()
        pending = await make_item("pending", status=ModerationStatus.pending)
        await repos.relationships.create(RelationshipRecord(user_id=user.id, item_id=pending.id, kind="like"))

        assert await repos.relationships.list_for_user(user.id, "like") == []
        assert await repos.relationships.count_for_user(user.id, "like") == 0
        assert await repos.relationships.count_all_for_user(user.id, "like") == 1

    async def test_existing_item_ids(self, repos, make_user, make_item):
        user = await make_user()
        a = await make_item("a")
        b = await make_item("b")
        await repos.relationships.create(RelationshipRecord(user_id=user.id, item_id=a.id, kind="like"))

        assert await repos.relationships.existing_item_ids(user.id, [a.id, b.id], "like") == {a.id}
        assert await repos.relationships.existing_item_ids(user.id, [], "like") == set()

    async def test_count_by_item_counts_across_users(self, repos, make_user, make_item):
        alice = await make_user()
        bob = await make_user()
        a = await make_item("a")
        b = await make_item("b")
        c = await make_item("c")
        for user in (alice, bob):
            await repos.relationships.create(RelationshipRecord(user_id=user.id, item_id=a.id, kind="like"))
        await repos.relationships.create(RelationshipRecord(user_id=alice.id, item_id=b.id, kind="like"))
        await repos.relationships.create(RelationshipRecord(user_id=bob.id, item_id=c.id, kind="favorite"))

        assert await repos.relationships.count_by_item([a.id, b.id, c.id], "like") == {a.id: 2, b.id: 1}
        assert await repos.relationships.count_by_item([], "like") == {}
