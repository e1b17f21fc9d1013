"""Comment endpoints for the forum API."""

from fastapi import APIRouter, status

from peoples_forum.api.v1.dependencies import ClaimsDep, StoreDep
from peoples_forum.models import Comment
from peoples_forum.schemas.comment import CommentCreate, CommentResponse
from peoples_forum.services import post_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(payload: CommentCreate, claims: ClaimsDep, store: StoreDep) -> Comment:
    """Comment on an existing post as the caller."""
    return post_service.add_comment(store, claims, payload)
