# src/peoples_forum/models/post.py
"""SQLAlchemy models for posts and their tags."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from peoples_forum.db.session import Base
from peoples_forum.db.time import utcnow


class Post(Base):
    """Primary content entity produced by members.

    Vote balance, latest activity and comment count are derived at query time
    by the ranking engine and never stored here.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("up_vote_count >= 0", name="ck_post_up_vote_count"),
        CheckConstraint("down_vote_count >= 0", name="ck_post_down_vote_count"),
        Index("ix_post_author_email", "author_email"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_email: Mapped[str] = mapped_column(String(320), nullable=False)
    author_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    # Absent on most posts; latest activity falls back to created_at.
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Counters are only ever incremented, atomically, at the store level.
    up_vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    down_vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    tag_links: Mapped[list[PostTag]] = relationship(
        "PostTag",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostTag.tag",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        """Return the post's tag set in lexicographic order."""
        return sorted(link.tag for link in self.tag_links)


class PostTag(Base):
    """One tag attached to one post.

    The composite primary key keeps a post's tag set free of duplicates.
    """

    __tablename__ = "post_tag"
    __table_args__ = (Index("ix_post_tag_tag", "tag"),)

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag: Mapped[str] = mapped_column(String(64), primary_key=True)

    post: Mapped[Post] = relationship("Post", back_populates="tag_links")
