# src/peoples_forum/models/__init__.py
"""SQLAlchemy models for the People's Forum application."""

from .announcement import Announcement
from .comment import Comment
from .post import Post, PostTag
from .report import Report
from .user import ROLE_ADMIN, ROLE_MEMBER, User

__all__ = [
    "Announcement",
    "Comment",
    "Post", "PostTag",
    "Report",
    "User", "ROLE_ADMIN", "ROLE_MEMBER",
]
