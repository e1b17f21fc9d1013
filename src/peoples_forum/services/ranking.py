"""Feed ranking and per-post derived fields.

Vote balance, latest activity and comment count are computed on every query,
either as SQL column expressions inside the feed pipeline or as pure functions
over a fetched post. None of them is ever written back to the post record.
"""
from __future__ import annotations

import enum
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, case, func, select

from peoples_forum.core.errors import NotFound
from peoples_forum.models import Comment, Post, PostTag
from peoples_forum.repositories.store import StoreAdapter
from peoples_forum.schemas.post import PostDetail, PostSummary

__all__ = [
    "FeedMode",
    "parse_feed_mode",
    "vote_balance",
    "latest_activity",
    "list_posts",
    "list_latest_by_author",
    "get_post",
    "list_tags",
]


class FeedMode(str, enum.Enum):
    """Supported feed orderings."""

    RECENT = "recent"
    TOP = "top"


def parse_feed_mode(value: str | int | None) -> FeedMode:
    """Map a client sort flag onto a feed mode.

    ``1`` or ``top`` selects the top feed; anything else, including a missing
    or unrecognised value, falls back to the recent feed.
    """
    if value is None:
        return FeedMode.RECENT
    flag = str(value).strip().lower()
    if flag in {"1", FeedMode.TOP.value}:
        return FeedMode.TOP
    return FeedMode.RECENT


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def vote_balance(post: Post) -> int:
    """Return upvotes minus downvotes for ``post``."""
    return post.up_vote_count - post.down_vote_count


def latest_activity(post: Post) -> datetime:
    """Return the later of the post's creation and last-update times."""
    if post.updated_at is None:
        return post.created_at
    if _as_utc(post.updated_at) > _as_utc(post.created_at):
        return post.updated_at
    return post.created_at


def _vote_balance_column() -> ColumnElement[int]:
    return (Post.up_vote_count - Post.down_vote_count).label("vote_balance")


def _latest_activity_column() -> ColumnElement[datetime]:
    return case(
        (
            and_(Post.updated_at.is_not(None), Post.updated_at > Post.created_at),
            Post.updated_at,
        ),
        else_=Post.created_at,
    ).label("latest_activity")


def _comment_count_column() -> ColumnElement[int]:
    return (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("comment_count")
    )


def _ranked_select(
    mode: FeedMode,
    *,
    author_email: str | None = None,
    tag: str | None = None,
    limit: int | None = None,
) -> Select[Any]:
    """Compose the feed pipeline: match, derive, sort, limit."""
    balance = _vote_balance_column()
    latest = _latest_activity_column()
    # populate_existing keeps stored counters in step with the computed balance.
    stmt = select(Post, balance, latest, _comment_count_column()).execution_options(
        populate_existing=True
    )

    # Filters run before sorting so the limit cuts the filtered set.
    if author_email is not None:
        stmt = stmt.where(Post.author_email == author_email)
    if tag is not None:
        stmt = stmt.where(Post.id.in_(select(PostTag.post_id).where(PostTag.tag == tag)))

    if mode is FeedMode.TOP:
        stmt = stmt.order_by(balance.desc(), latest.desc(), Post.id.desc())
    else:
        stmt = stmt.order_by(latest.desc(), Post.id.desc())

    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


def _summary_fields(post: Post, balance: int, latest: datetime, comments: int) -> dict[str, Any]:
    return {
        "id": post.id,
        "author_name": post.author_name,
        "author_email": post.author_email,
        "author_image": post.author_image,
        "title": post.title,
        "tags": post.tags,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "up_vote_count": post.up_vote_count,
        "down_vote_count": post.down_vote_count,
        "vote_balance": int(balance),
        "latest_activity": latest,
        "comment_count": int(comments or 0),
    }


def list_posts(
    store: StoreAdapter,
    mode: FeedMode = FeedMode.RECENT,
    *,
    author_email: str | None = None,
    tag: str | None = None,
    limit: int | None = None,
) -> list[PostSummary]:
    """Return posts in feed order with their derived fields.

    Args:
        store: Request-scoped store adapter.
        mode: ``recent`` sorts by latest activity; ``top`` sorts by vote
            balance, then latest activity.
        author_email: Only include posts by this author.
        tag: Only include posts carrying this tag.
        limit: Maximum number of posts; None returns the whole filtered set.

    Returns:
        Ordered post summaries without their body text.
    """
    if limit is not None and limit < 1:
        raise ValueError("limit must be a positive integer")
    rows = store.run_pipeline(
        _ranked_select(mode, author_email=author_email, tag=tag, limit=limit)
    )
    return [PostSummary(**_summary_fields(*row)) for row in rows]


def list_latest_by_author(store: StoreAdapter, email: str, count: int) -> list[PostSummary]:
    """Return an author's ``count`` most recently active posts."""
    return list_posts(store, FeedMode.RECENT, author_email=email, limit=count)


def get_post(store: StoreAdapter, post_id: int) -> PostDetail:
    """Return one post with its body and derived fields.

    Raises:
        NotFound: If the post does not exist.
    """
    stmt = _ranked_select(FeedMode.RECENT).where(Post.id == post_id)
    rows: Sequence[Any] = store.run_pipeline(stmt)
    if not rows:
        raise NotFound.for_entity("Post")
    post, balance, latest, comments = rows[0]
    return PostDetail(
        **_summary_fields(post, balance, latest, comments),
        description=post.description,
    )


def list_tags(store: StoreAdapter) -> list[str]:
    """Return every tag in use, deduplicated and sorted."""
    return store.scalars(select(PostTag.tag).distinct().order_by(PostTag.tag))
