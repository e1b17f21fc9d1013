"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    post_id: int = Field(..., ge=1, description="Post being commented on")
    body: str = Field(..., min_length=1, max_length=5000, description="Comment text")


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    post_id: int
    author_email: str
    body: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
