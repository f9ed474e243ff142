"""Message Source tests — author filters for global and personalized pages."""

from uuid import uuid4

from feedline.core.domain_types import FeedKind, UserId
from feedline.core.message_source import (
    FollowedAuthorsSource, GlobalSource, is_empty_source,
)


def test_global_source_has_no_filter():
    source = GlobalSource()
    assert source.author_filter() is None
    assert source.kind == FeedKind.GLOBAL
    assert not is_empty_source(source)


def test_followed_source_filters_to_followees():
    followees = frozenset({UserId(uuid4()), UserId(uuid4())})
    source = FollowedAuthorsSource(followees)
    assert source.author_filter() == followees
    assert source.kind == FeedKind.PERSONAL
    assert not is_empty_source(source)


def test_no_followees_means_nothing_visible():
    source = FollowedAuthorsSource(frozenset())
    assert source.author_filter() == frozenset()
    assert is_empty_source(source)
