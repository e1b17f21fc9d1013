# src/peoples_forum/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .announcements import router as announcements_router
from .auth import router as auth_router
from .comments import router as comments_router
from .moderation import router as moderation_router
from .posts import router as posts_router
from .tags import router as tags_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "announcements_router",
    "auth_router",
    "comments_router",
    "moderation_router",
    "posts_router",
    "tags_router",
    "users_router",
]
