# src/peoples_forum/models/report.py
"""Models tracking abuse reports filed against comments."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from peoples_forum.db.session import Base
from peoples_forum.db.time import utcnow


class Report(Base):
    """Abuse report targeting exactly one comment."""

    __tablename__ = "report"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id"),
        nullable=False,
        index=True,
    )
    reporter_email: Mapped[str] = mapped_column(String(320), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
