"""Announcement endpoints for the forum API."""

from fastapi import APIRouter, status

from peoples_forum.api.v1.dependencies import AdminDep, StoreDep
from peoples_forum.models import Announcement, User
from peoples_forum.schemas.announcement import (
    AnnouncementCount,
    AnnouncementCreate,
    AnnouncementResponse,
)

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("", response_model=list[AnnouncementResponse])
async def list_announcements(store: StoreDep) -> list[Announcement]:
    """Return announcements, newest first."""
    return store.find_many(
        Announcement,
        order_by=(Announcement.created_at.desc(), Announcement.id.desc()),
    )


@router.get("/count", response_model=AnnouncementCount)
async def count_announcements(store: StoreDep) -> AnnouncementCount:
    """Return how many announcements have been published."""
    return AnnouncementCount(count=store.count(Announcement))


@router.post("", response_model=AnnouncementResponse, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    payload: AnnouncementCreate,
    admin: AdminDep,
    store: StoreDep,
) -> Announcement:
    """Publish an announcement (admin only)."""
    announcement = Announcement(title=payload.title, body=payload.body, author_email=admin.email)
    store.insert(announcement)
    store.commit()
    store.refresh(announcement)
    return announcement
