"""API tests for favorite and like toggles and listings."""

import asyncio

import pytest
from httpx import AsyncClient

from conftest import bearer
from quotely.core.models.domain.enums import ModerationStatus

RELATIONSHIPS = "/api/v1/relationships"


@pytest.fixture
async def reader(make_user, issue_token):
    user = await make_user("reader@example.com")
    return user, bearer(issue_token(user))


class TestToggle:
    async def test_toggle_twice_adds_then_removes(self, client: AsyncClient, make_item, reader):
        _, headers = reader
        item = await make_item()
        url = f"{RELATIONSHIPS}/favorite/toggle"

        first = await client.post(url, json={"itemId": item.id}, headers=headers)
        second = await client.post(url, json={"itemId": item.id}, headers=headers)

        assert first.json() == {"action": "added"}
        assert second.json() == {"action": "removed"}
        listing = (await client.get(f"{RELATIONSHIPS}/favorite", headers=headers)).json()
        assert listing["items"] == []

    async def test_kinds_are_independent(self, client: AsyncClient, make_item, reader):
        _, headers = reader
        item = await make_item()

        await client.post(f"{RELATIONSHIPS}/like/toggle", json={"itemId": item.id}, headers=headers)

        favorites = (await client.get(f"{RELATIONSHIPS}/favorite", headers=headers)).json()
        likes = (await client.get(f"{RELATIONSHIPS}/like", headers=headers)).json()
        assert favorites["pagination"]["total"] == 0
        assert [entry["id"] for entry in likes["items"]] == [item.id]
        assert likes["items"][0]["is_liked"] is True
        assert likes["items"][0]["related_at"]

    async def test_requires_token(self, client: AsyncClient, make_item):
        item = await make_item()

        response = await client.post(f"{RELATIONSHIPS}/like/toggle", json={"itemId": item.id})

        assert response.status_code == 401

    async def test_unapproved_item_not_found(self, client: AsyncClient, make_item, reader):
        _, headers = reader
        item = await make_item(status=ModerationStatus.pending)

        response = await client.post(f"{RELATIONSHIPS}/like/toggle", json={"itemId": item.id}, headers=headers)

        assert response.status_code == 404

    async def test_unknown_kind_rejected(self, client: AsyncClient, make_item, reader):
        _, headers = reader
        item = await make_item()

        response = await client.post(f"{RELATIONSHIPS}/bookmark/toggle", json={"itemId": item.id}, headers=headers)

        assert response.status_code == 400

    async def test_missing_item_id_rejected(self, client: AsyncClient, reader):
        _, headers = reader

        response = await client.post(f"{RELATIONSHIPS}/like/toggle", json={}, headers=headers)

        assert response.status_code == 400

    async def test_concurrent_requests_leave_one_record(self, client: AsyncClient, make_item, reader):
        _, headers = reader
        item = await make_item()
        url = f"{RELATIONSHIPS}/favorite/toggle"

        responses = await asyncio.gather(
            *(client.post(url, json={"itemId": item.id}, headers=headers) for _ in range(4))
        )

        assert all(response.status_code == 200 for response in responses)
        listing = (await client.get(f"{RELATIONSHIPS}/favorite", headers=headers)).json()
        assert listing["pagination"]["total"] in (0, 1)


class TestListing:
    async def test_newest_first_and_paged(self, client: AsyncClient, make_item, reader):
        _, headers = reader
        items = [await make_item(f"Quote {n}") for n in range(3)]
        for item in items:
            await client.post(f"{RELATIONSHIPS}/favorite/toggle", json={"itemId": item.id}, headers=headers)

        page = (await client.get(f"{RELATIONSHIPS}/favorite", params={"limit": 2}, headers=headers)).json()

        assert [entry["id"] for entry in page["items"]] == [items[2].id, items[1].id]
        assert page["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    async def test_list_requires_token(self, client: AsyncClient):
        response = await client.get(f"{RELATIONSHIPS}/like")

        assert response.status_code == 401
