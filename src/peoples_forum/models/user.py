# src/peoples_forum/models/user.py
"""SQLAlchemy models for forum members."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from peoples_forum.db.session import Base
from peoples_forum.db.time import utcnow

ROLE_MEMBER = "member"
ROLE_ADMIN = "admin"


class User(Base):
    """Member identity keyed by email address."""

    __tablename__ = "user_account"
    __table_args__ = (
        CheckConstraint("role IN ('member', 'admin')", name="ck_user_account_role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Only ever moves member -> admin through an admin action.
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_MEMBER)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    @property
    def is_admin(self) -> bool:
        """Return True when the member holds the admin role."""
        return self.role == ROLE_ADMIN
