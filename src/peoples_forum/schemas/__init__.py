# src/peoples_forum/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .announcement import AnnouncementCount, AnnouncementCreate, AnnouncementResponse, ForumStats
from .comment import CommentCreate, CommentResponse
from .common import Message
from .post import PostCreate, PostDetail, PostSummary, VoteResponse
from .report import ReportCreate, ReportResponse, ResolutionResponse
from .user import (
    AdminStatus,
    RegisterResponse,
    TokenRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
)

__all__ = [
    "AnnouncementCount", "AnnouncementCreate", "AnnouncementResponse", "ForumStats",
    "CommentCreate", "CommentResponse",
    "Message",
    "PostCreate", "PostDetail", "PostSummary", "VoteResponse",
    "ReportCreate", "ReportResponse", "ResolutionResponse",
    "AdminStatus", "RegisterResponse", "TokenRequest", "TokenResponse",
    "UserCreate", "UserResponse",
]
