"""Unit tests for API schema conversion."""

from datetime import datetime, timezone

from quotely.core.database.entities import ContentItem, User
from quotely.core.models.domain.models import Page
from quotely.core.models.io import ContentItemRead, Pagination, RelatedContentRead, ToggleRequest, UserRead

CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _item(**overrides) -> ContentItem:
    values = dict(id=1, kind="quote", body="Body", secondary="Author", status="approved", created_at=CREATED)
    values.update(overrides)
    return ContentItem(**values)


class TestContentItemRead:
    def test_defaults_filled_once(self):
        read = ContentItemRead.from_entity(_item())

        assert read.tags == []
        assert read.is_liked is False
        assert read.is_favorited is False

    def test_corrupt_tags_read_as_empty(self):
        assert ContentItemRead.from_entity(_item(tags="{not json")).tags == []

    def test_related_read_carries_timestamp(self):
        related_at = datetime(2026, 2, 1, tzinfo=timezone.utc)
        read = RelatedContentRead.from_related(_item(tags='["a"]'), related_at, is_favorited=True)

        assert read.related_at == related_at
        assert read.tags == ["a"]
        assert read.is_favorited is True


def test_user_read_has_no_password_hash():
    user = User(id=3, email="a@example.com", name="A", password_hash="secret-hash", created_at=CREATED)
    dumped = UserRead.from_entity(user).model_dump()

    assert "password_hash" not in dumped
    assert dumped["role"] == "user"


def test_pagination_from_page():
    pagination = Pagination.from_page(Page(items=[], total_count=41, page=2, page_size=20))
    assert pagination.model_dump() == {"page": 2, "limit": 20, "total": 41, "pages": 3}


def test_toggle_request_accepts_camel_case_alias():
    assert ToggleRequest.model_validate({"itemId": 5}).item_id == 5
    assert ToggleRequest.model_validate({"item_id": 6}).item_id == 6
