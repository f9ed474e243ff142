"""Message schema tests — body validation and page-to-response shaping."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from feedline.core.domain_types import (
    Author, Message, MessageId, MessageWithAuthor, UserId,
)
from feedline.core.pagination import PageInfo, PageResult
from feedline.schemas.message import FeedResponse, MessageCreate, TimelineResponse
from feedline.schemas.user import Credentials

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _message(author_id):
    return Message(
        id=MessageId(uuid4()), author_id=author_id, body="hi",
        like_count=3, created_at=T0, updated_at=T0,
    )


def test_message_body_is_stripped():
    assert MessageCreate(body="  hi  ").body == "hi"


@pytest.mark.parametrize("body", ["", "   ", "x" * 281])
def test_message_body_rejected(body):
    with pytest.raises(ValidationError):
        MessageCreate(body=body)


def test_message_body_at_limit_accepted():
    assert len(MessageCreate(body="x" * 280).body) == 280


def test_credentials_strip_name():
    assert Credentials(name=" alice ", password="12345678").name == "alice"


def test_timeline_response_shape():
    author_id = UserId(uuid4())
    page = PageResult(
        items=(_message(author_id),),
        page_info=PageInfo(offset=0, limit=1, next_offset=1),
    )
    body = TimelineResponse.from_page(page).model_dump(mode="json")
    assert body["pagination"] == {"offset": 0, "limit": 1, "next_offset": 1}
    assert body["messages"][0]["author_id"] == str(author_id)
    assert "author" not in body["messages"][0]


def test_feed_response_nests_author():
    author = Author(id=UserId(uuid4()), name="alice", created_at=T0, updated_at=T0)
    page = PageResult(
        items=(MessageWithAuthor(message=_message(author.id), author=author),),
        page_info=PageInfo(offset=0, limit=20),
    )
    body = FeedResponse.from_page(page).model_dump(mode="json")
    assert body["messages"][0]["author"]["name"] == "alice"
    assert body["messages"][0]["like_count"] == 3
    assert body["pagination"]["next_offset"] is None


def test_message_body_padding_does_not_count_toward_limit():
    padded = "   " + "x" * 280 + "\n"
    assert MessageCreate(body=padded).body == "x" * 280


def test_credentials_name_padding_does_not_count_toward_limit():
    assert Credentials(name=" " + "a" * 50 + " ", password="12345678").name == "a" * 50
