"""Administrator dashboard endpoints."""

from fastapi import APIRouter

from peoples_forum.api.v1.dependencies import AdminDep, StoreDep
from peoples_forum.schemas.announcement import ForumStats
from peoples_forum.services.user_service import collect_stats

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=ForumStats)
async def get_stats(_admin: AdminDep, store: StoreDep) -> ForumStats:
    """Return aggregate counts of members, content and votes."""
    return collect_stats(store)
