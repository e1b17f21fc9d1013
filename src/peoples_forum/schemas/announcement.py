"""Announcement and statistics Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementCreate(BaseModel):
    """Schema for publishing an announcement."""

    title: str = Field(..., min_length=1, max_length=300)
    body: str = Field(..., min_length=1, max_length=10_000)


class AnnouncementResponse(BaseModel):
    """Schema for announcement information returned by the API."""

    id: int
    title: str
    body: str
    author_email: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AnnouncementCount(BaseModel):
    """Number of published announcements."""

    count: int


class ForumStats(BaseModel):
    """Aggregate counts shown on the admin dashboard."""

    users: int
    admins: int
    posts: int
    comments: int
    reports: int
    announcements: int
    total_up_votes: int
    total_down_votes: int
