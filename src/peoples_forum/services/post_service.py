"""Service-level helpers for posts, votes and comments."""
from __future__ import annotations

import logging
from typing import Literal

from sqlalchemy import select

from peoples_forum.core.errors import Forbidden
from peoples_forum.core.security import TokenClaims
from peoples_forum.models import Comment, Post, PostTag, Report
from peoples_forum.repositories.store import StoreAdapter
from peoples_forum.schemas.comment import CommentCreate
from peoples_forum.schemas.post import PostCreate, VoteResponse
from peoples_forum.services.ranking import vote_balance
from peoples_forum.services.user_service import get_user_by_email

logger = logging.getLogger(__name__)

VoteDirection = Literal["up", "down"]

_VOTE_FIELDS: dict[str, str] = {
    "up": "up_vote_count",
    "down": "down_vote_count",
}


def create_post(store: StoreAdapter, claims: TokenClaims, payload: PostCreate) -> Post:
    """Persist a new post authored by the verified identity.

    Author name and avatar fall back to the member's profile when the payload
    leaves them out.
    """
    author = get_user_by_email(store, claims.email)
    post = Post(
        author_name=payload.author_name or (author.name if author else None) or claims.name,
        author_email=claims.email,
        author_image=payload.author_image or (author.image if author else None),
        title=payload.title,
        description=payload.description,
        up_vote_count=0,
        down_vote_count=0,
    )
    # Tags are already normalized and deduplicated by the schema.
    post.tag_links = [PostTag(tag=tag) for tag in payload.tags]
    store.insert(post)
    store.commit()
    return post


def delete_post(store: StoreAdapter, claims: TokenClaims, post_id: int) -> None:
    """Delete a post together with its tags, comments and their reports.

    Raises:
        NotFound: If the post does not exist.
        Forbidden: If the caller is neither the author nor an admin.
    """
    post = store.get_or_404(Post, post_id)
    if post.author_email != claims.email:
        caller = get_user_by_email(store, claims.email)
        if caller is None or not caller.is_admin:
            raise Forbidden("You can only delete your own posts")

    def _remove(tx: StoreAdapter) -> None:
        comment_ids = select(Comment.id).where(Comment.post_id == post_id)
        tx.delete_where(Report, Report.comment_id.in_(comment_ids))
        tx.delete_where(Comment, Comment.post_id == post_id)
        tx.delete_where(PostTag, PostTag.post_id == post_id)
        tx.delete_by_id(Post, post_id)

    store.with_transaction(_remove)
    logger.info("Deleted post %s", post_id)


def cast_vote(store: StoreAdapter, post_id: int, direction: VoteDirection) -> VoteResponse:
    """Apply one upvote or downvote as a single atomic increment.

    Raises:
        NotFound: If the post does not exist.
        ValueError: If ``direction`` is not ``up`` or ``down``.
    """
    field = _VOTE_FIELDS.get(direction)
    if field is None:
        raise ValueError(f"Unknown vote direction: {direction!r}")

    store.atomic_increment(Post, post_id, field, 1)
    store.commit()

    post = store.get_or_404(Post, post_id)
    return VoteResponse(
        post_id=post.id,
        direction=direction,
        count=getattr(post, field),
        up_vote_count=post.up_vote_count,
        down_vote_count=post.down_vote_count,
        vote_balance=vote_balance(post),
    )


def add_comment(store: StoreAdapter, claims: TokenClaims, payload: CommentCreate) -> Comment:
    """Attach a comment to an existing post.

    Raises:
        NotFound: If the post does not exist at insertion time.
    """
    store.get_or_404(Post, payload.post_id)
    comment = Comment(
        post_id=payload.post_id,
        author_email=claims.email,
        body=payload.body,
    )
    store.insert(comment)
    store.commit()
    return comment


def list_comments(store: StoreAdapter, post_id: int) -> list[Comment]:
    """Return a post's comments, oldest first.

    Raises:
        NotFound: If the post does not exist.
    """
    store.get_or_404(Post, post_id)
    return store.find_many(
        Comment,
        Comment.post_id == post_id,
        order_by=(Comment.created_at, Comment.id),
    )
