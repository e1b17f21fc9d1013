# src/peoples_forum/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    announcements_router,
    auth_router,
    comments_router,
    moderation_router,
    posts_router,
    tags_router,
    users_router,
)

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
