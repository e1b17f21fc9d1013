"""Registration, role changes and aggregate statistics for members."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, or_, select

from peoples_forum.core.errors import Conflict, NotFound
from peoples_forum.models import ROLE_ADMIN, ROLE_MEMBER, Announcement, Comment, Post, Report, User
from peoples_forum.repositories.store import StoreAdapter
from peoples_forum.schemas.announcement import ForumStats
from peoples_forum.schemas.user import UserCreate

__all__ = [
    "ALREADY_EXISTS",
    "RegistrationResult",
    "register_user",
    "get_user_by_email",
    "list_users",
    "is_admin",
    "promote_to_admin",
    "collect_stats",
]

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "user already exists"


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a sign-in registration."""

    inserted_id: int | None
    created: bool

    @property
    def message(self) -> str | None:
        """Return the already-exists sentinel for repeat registrations."""
        return None if self.created else ALREADY_EXISTS


def get_user_by_email(store: StoreAdapter, email: str) -> User | None:
    """Return the member registered under ``email``."""
    return store.find_one(User, User.email == email)


def register_user(store: StoreAdapter, payload: UserCreate) -> RegistrationResult:
    """Create the member on first sign-in; repeat sign-ins are a no-op.

    A concurrent duplicate that slips past the lookup is rejected by the
    unique email constraint and folded into the same "already exists" result.
    """
    if get_user_by_email(store, payload.email) is not None:
        return RegistrationResult(inserted_id=None, created=False)

    user = User(
        email=payload.email,
        name=payload.name,
        image=payload.image,
        role=ROLE_MEMBER,
    )
    try:
        user_id = store.insert(user)
        store.commit()
    except Conflict:
        return RegistrationResult(inserted_id=None, created=False)

    logger.info("Registered member %s", user_id)
    return RegistrationResult(inserted_id=user_id, created=True)


def list_users(store: StoreAdapter, search: str | None = None) -> list[User]:
    """Return members, optionally filtered by a name or email substring."""
    predicates = []
    if search:
        pattern = f"%{search.strip()}%"
        predicates.append(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
    return store.find_many(User, *predicates, order_by=(User.id,))


def is_admin(store: StoreAdapter, email: str) -> bool:
    """Return True when ``email`` belongs to an administrator."""
    user = get_user_by_email(store, email)
    return user is not None and user.role == ROLE_ADMIN


def promote_to_admin(store: StoreAdapter, email: str) -> User:
    """Grant the admin role. Promoting an admin again changes nothing.

    Raises:
        NotFound: If no member is registered under ``email``.
    """
    user = get_user_by_email(store, email)
    if user is None:
        raise NotFound.for_entity("User")
    if user.role != ROLE_ADMIN:
        user.role = ROLE_ADMIN
        store.commit()
        store.refresh(user)
        logger.info("Promoted member %s to admin", user.id)
    return user


def collect_stats(store: StoreAdapter) -> ForumStats:
    """Count members, content and votes for the admin dashboard."""
    vote_totals = store.run_pipeline(
        select(
            func.coalesce(func.sum(Post.up_vote_count), 0),
            func.coalesce(func.sum(Post.down_vote_count), 0),
        )
    )
    total_up, total_down = vote_totals[0]
    return ForumStats(
        users=store.count(User),
        admins=store.count(User, User.role == ROLE_ADMIN),
        posts=store.count(Post),
        comments=store.count(Comment),
        reports=store.count(Report),
        announcements=store.count(Announcement),
        total_up_votes=int(total_up),
        total_down_votes=int(total_down),
    )
