# src/peoples_forum/models/comment.py
"""SQLAlchemy model for comments left on posts."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from peoples_forum.db.session import Base
from peoples_forum.db.time import utcnow


class Comment(Base):
    """A member's reply to a post.

    Removed only together with the report that targets it.
    """

    __tablename__ = "comment"
    __table_args__ = (Index("ix_comment_post_id", "post_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("post.id"), nullable=False)
    author_email: Mapped[str] = mapped_column(String(320), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
