# src/peoples_forum/api/v1/endpoints/posts.py
"""Post-related endpoints for the forum API."""

from typing import Literal

from fastapi import APIRouter, Query, status

from peoples_forum.api.v1.dependencies import ClaimsDep, StoreDep
from peoples_forum.core.settings import settings
from peoples_forum.models import Comment
from peoples_forum.schemas.comment import CommentResponse
from peoples_forum.schemas.post import PostCreate, PostDetail, PostSummary, VoteResponse
from peoples_forum.services import post_service, ranking

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostSummary])
async def list_posts(
    store: StoreDep,
    sort: str | None = Query(None, description="1 for top posts, 0 or absent for recent"),
    tag: str | None = Query(None, max_length=64, description="Only posts carrying this tag"),
    limit: int | None = Query(None, ge=1, description="Maximum number of posts to return"),
) -> list[PostSummary]:
    """List posts ranked by recent activity or by vote balance.

    Args:
        store: Store adapter
        sort: Feed mode flag; unrecognised values fall back to recent
        tag: Optional tag filter, applied before ranking
        limit: Optional cap, applied after ranking

    Returns:
        Post summaries with vote balance, latest activity and comment count
    """
    return ranking.list_posts(
        store,
        ranking.parse_feed_mode(sort),
        tag=tag.strip().lower() if tag else None,
        limit=limit or settings.default_feed_limit,
    )


@router.get("/latest", response_model=list[PostSummary])
async def list_latest_posts(
    store: StoreDep,
    email: str = Query(..., min_length=3, description="Author email"),
    count: int = Query(3, ge=1, le=100, description="How many posts to return"),
) -> list[PostSummary]:
    """Return an author's most recently active posts."""
    return ranking.list_latest_by_author(store, email.strip().lower(), count)


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(post_id: int, store: StoreDep) -> PostDetail:
    """Get a specific post by ID, including its body."""
    return ranking.get_post(store, post_id)


@router.post("", response_model=PostDetail, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, claims: ClaimsDep, store: StoreDep) -> PostDetail:
    """Create a new post authored by the caller."""
    post = post_service.create_post(store, claims, payload)
    return ranking.get_post(store, post.id)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, claims: ClaimsDep, store: StoreDep) -> None:
    """Delete a post with its comments (author or admin only)."""
    post_service.delete_post(store, claims, post_id)


@router.patch("/{post_id}/vote/{direction}", response_model=VoteResponse)
async def vote_on_post(
    post_id: int,
    direction: Literal["up", "down"],
    store: StoreDep,
) -> VoteResponse:
    """Upvote or downvote a post; returns the new counter values."""
    return post_service.cast_vote(store, post_id, direction)


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_post_comments(post_id: int, store: StoreDep) -> list[Comment]:
    """Get the comments on a post, oldest first."""
    return post_service.list_comments(store, post_id)
