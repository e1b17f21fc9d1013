# src/peoples_forum/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_TAGS = 10
MAX_TAG_LENGTH = 64


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=300, description="Post title")
    description: str = Field("", max_length=10_000, description="Post body")
    tags: list[str] = Field(default_factory=list, description="Free-form topic tags")
    author_name: str | None = Field(None, max_length=200, description="Display name override")
    author_image: str | None = Field(None, max_length=2048, description="Avatar URL")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        """Reject titles made only of whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Trim, lower-case and deduplicate tags, keeping first-seen order."""
        seen: dict[str, None] = {}
        for raw in v:
            tag = raw.strip().lower()
            if not tag:
                continue
            if len(tag) > MAX_TAG_LENGTH:
                raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
            seen.setdefault(tag, None)
        if len(seen) > MAX_TAGS:
            raise ValueError(f"At most {MAX_TAGS} tags per post")
        return list(seen)


class PostSummary(BaseModel):
    """Post as it appears in feed listings, with derived ranking fields."""

    id: int
    author_name: str | None
    author_email: str
    author_image: str | None
    title: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime | None
    up_vote_count: int
    down_vote_count: int
    vote_balance: int
    latest_activity: datetime
    comment_count: int

    model_config = ConfigDict(from_attributes=True)


class PostDetail(PostSummary):
    """Full post including its body, returned by single-post fetches."""

    description: str


class VoteResponse(BaseModel):
    """Counters after a vote has been applied."""

    post_id: int
    direction: Literal["up", "down"]
    count: int = Field(..., description="New value of the counter that was incremented")
    up_vote_count: int
    down_vote_count: int
    vote_balance: int
