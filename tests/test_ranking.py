# tests/test_ranking.py
"""Tests for feed ordering and derived post fields."""

from datetime import UTC, datetime, timedelta

import pytest

from peoples_forum.core.errors import NotFound
from peoples_forum.models import Comment
from peoples_forum.services.post_service import cast_vote
from peoples_forum.services.ranking import (
    FeedMode,
    get_post,
    latest_activity,
    list_latest_by_author,
    list_posts,
    list_tags,
    parse_feed_mode,
    vote_balance,
)

BASE = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def _naive(moment: datetime) -> datetime:
    return moment.replace(tzinfo=None)


@pytest.mark.parametrize(
    ("flag", "expected"),
    [
        ("1", FeedMode.TOP),
        (1, FeedMode.TOP),
        ("top", FeedMode.TOP),
        ("0", FeedMode.RECENT),
        (None, FeedMode.RECENT),
        ("sideways", FeedMode.RECENT),
    ],
)
def test_parse_feed_mode(flag, expected) -> None:
    assert parse_feed_mode(flag) is expected


class TestDerivedFields:
    def test_vote_balance_is_up_minus_down(self, make_post):
        assert vote_balance(make_post(up=5, down=2)) == 3
        assert vote_balance(make_post(up=0, down=4)) == -4

    def test_latest_activity_without_update_is_creation_time(self, store, make_post):
        post = make_post(created_at=BASE)
        assert latest_activity(post) == post.created_at

        [summary] = list_posts(store)
        assert _naive(summary.latest_activity) == _naive(BASE)

    def test_latest_activity_prefers_later_update(self, store, make_post):
        updated = BASE + timedelta(hours=3)
        make_post(created_at=BASE, updated_at=updated)

        [summary] = list_posts(store)
        assert _naive(summary.latest_activity) == _naive(updated)

    def test_earlier_update_does_not_win(self, store, make_post):
        make_post(created_at=BASE, updated_at=BASE - timedelta(days=1))

        [summary] = list_posts(store)
        assert _naive(summary.latest_activity) == _naive(BASE)

    def test_comment_count(self, store, db_session, make_post):
        post = make_post()
        for i in range(3):
            db_session.add(Comment(post_id=post.id, author_email="c@example.com", body=f"#{i}"))
        db_session.commit()

        assert get_post(store, post.id).comment_count == 3


class TestFeedOrdering:
    def test_top_orders_by_balance(self, store, make_post):
        middle = make_post("middle", up=5, down=2, created_at=BASE)
        low = make_post("low", up=1, down=0, created_at=BASE)
        high = make_post("high", up=10, down=0, created_at=BASE)

        ids = [p.id for p in list_posts(store, FeedMode.TOP)]
        assert ids == [high.id, middle.id, low.id]

    def test_top_ties_broken_by_latest_activity(self, store, make_post):
        older = make_post("older", up=2, created_at=BASE)
        newer = make_post("newer", up=2, created_at=BASE + timedelta(hours=1))
        bumped = make_post(
            "bumped",
            up=2,
            created_at=BASE - timedelta(days=1),
            updated_at=BASE + timedelta(hours=2),
        )

        ids = [p.id for p in list_posts(store, FeedMode.TOP)]
        assert ids == [bumped.id, newer.id, older.id]

    def test_recent_ignores_votes(self, store, make_post):
        popular = make_post("popular", up=50, created_at=BASE)
        fresh = make_post("fresh", created_at=BASE + timedelta(minutes=5))

        ids = [p.id for p in list_posts(store, FeedMode.RECENT)]
        assert ids == [fresh.id, popular.id]

    def test_full_ties_fall_back_to_id(self, store, make_post):
        a = make_post("a", created_at=BASE)
        b = make_post("b", created_at=BASE)

        assert [p.id for p in list_posts(store, FeedMode.TOP)] == [b.id, a.id]

    def test_filter_runs_before_limit(self, store, make_post):
        for i in range(3):
            make_post(f"loud {i}", up=100, created_at=BASE)
        quiet = make_post("quiet", tags=["python"], created_at=BASE)
        quieter = make_post("quieter", down=1, tags=["python"], created_at=BASE)

        rows = list_posts(store, FeedMode.TOP, tag="python", limit=2)
        assert [p.id for p in rows] == [quiet.id, quieter.id]

    def test_author_filter_and_limit(self, store, make_post):
        make_post("not mine", author_email="bob@example.com", created_at=BASE + timedelta(days=9))
        mine = [
            make_post(f"mine {i}", author_email="alice@example.com", created_at=BASE + timedelta(days=i))
            for i in range(4)
        ]

        rows = list_latest_by_author(store, "alice@example.com", 3)
        assert [p.id for p in rows] == [mine[3].id, mine[2].id, mine[1].id]

    def test_non_positive_limit_rejected(self, store):
        with pytest.raises(ValueError):
            list_posts(store, limit=0)

    def test_summary_reflects_counter_changes(self, store, make_post):
        post = make_post(up=1)
        assert list_posts(store)[0].vote_balance == 1

        store.atomic_increment(type(post), post.id, "down_vote_count", 3)
        store.commit()
        assert list_posts(store)[0].vote_balance == -2


class TestSinglePostAndTags:
    def test_get_post_includes_body(self, store, make_post):
        post = make_post(description="Long body", tags=["b", "a"])
        detail = get_post(store, post.id)
        assert detail.description == "Long body"
        assert detail.tags == ["a", "b"]

    def test_get_post_missing(self, store):
        with pytest.raises(NotFound) as exc_info:
            get_post(store, 777)
        assert exc_info.value.message == "Post not found"

    def test_list_tags_is_sorted_union(self, store, make_post):
        make_post(tags=["a", "b"])
        make_post(tags=["b", "c"])
        assert list_tags(store) == ["a", "b", "c"]

    def test_list_tags_empty(self, store):
        assert list_tags(store) == []


def test_top_feed_tracks_a_vote(store, make_post) -> None:
    post = make_post(up=5, down=2, created_at=BASE)

    [before] = list_posts(store, FeedMode.TOP)
    assert before.vote_balance == 3
    assert _naive(before.latest_activity) == _naive(BASE)

    cast_vote(store, post.id, "up")

    [after] = list_posts(store, FeedMode.TOP)
    assert after.vote_balance == 4
    assert after.up_vote_count == 6
