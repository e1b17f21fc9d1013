"""initial forum schema

Revision ID: 5c2e81a4d7f0
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c2e81a4d7f0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create members, posts, tags, comments, reports and announcements."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("role IN ('member', 'admin')", name="ck_user_account_role"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_account_email", "user_account", ["email"], unique=True)

    op.create_table(
        "post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_name", sa.Text(), nullable=True),
        sa.Column("author_email", sa.String(length=320), nullable=False),
        sa.Column("author_image", sa.Text(), nullable=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("up_vote_count", sa.Integer(), nullable=False),
        sa.Column("down_vote_count", sa.Integer(), nullable=False),
        sa.CheckConstraint("up_vote_count >= 0", name="ck_post_up_vote_count"),
        sa.CheckConstraint("down_vote_count >= 0", name="ck_post_down_vote_count"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_author_email", "post", ["author_email"], unique=False)

    op.create_table(
        "post_tag",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("tag", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "tag"),
    )
    op.create_index("ix_post_tag_tag", "post_tag", ["tag"], unique=False)

    op.create_table(
        "comment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("author_email", sa.String(length=320), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comment_post_id", "comment", ["post_id"], unique=False)

    op.create_table(
        "report",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("comment_id", sa.Integer(), nullable=False),
        sa.Column("reporter_email", sa.String(length=320), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["comment_id"], ["comment.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_report_comment_id", "report", ["comment_id"], unique=False)

    op.create_table(
        "announcement",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("author_email", sa.String(length=320), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_announcement_created_at", "announcement", ["created_at"], unique=False)


def downgrade() -> None:
    """Drop every forum table."""
    op.drop_index("ix_announcement_created_at", table_name="announcement")
    op.drop_table("announcement")
    op.drop_index("ix_report_comment_id", table_name="report")
    op.drop_table("report")
    op.drop_index("ix_comment_post_id", table_name="comment")
    op.drop_table("comment")
    op.drop_index("ix_post_tag_tag", table_name="post_tag")
    op.drop_table("post_tag")
    op.drop_index("ix_post_author_email", table_name="post")
    op.drop_table("post")
    op.drop_index("ix_user_account_email", table_name="user_account")
    op.drop_table("user_account")
