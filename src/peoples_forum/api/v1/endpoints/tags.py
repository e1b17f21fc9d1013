"""Tag listing endpoint."""

from fastapi import APIRouter

from peoples_forum.api.v1.dependencies import StoreDep
from peoples_forum.services import ranking

router = APIRouter(prefix="/tags", tags=["posts"])


@router.get("", response_model=list[str])
async def list_tags(store: StoreDep) -> list[str]:
    """Return every tag in use across all posts, sorted."""
    return ranking.list_tags(store)
