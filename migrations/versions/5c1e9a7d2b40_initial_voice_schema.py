"""initial voice schema

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

comment_kind = sa.Enum("text", "voice", name="comment_kind")
notification_type = sa.Enum("like", "comment", "follow", name="notification_type")


def upgrade() -> None:
    """Create users, voices, the interaction ledger and rotation history."""
    op.create_table(
        "users",
        sa.Column("fid", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("pfp_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("fid"),
    )
    op.create_table(
        "user_points",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_fid", sa.BigInteger(), nullable=False),
        sa.Column("total_points", sa.Integer(), nullable=False),
        sa.Column("view_points", sa.Integer(), nullable=False),
        sa.Column("like_points", sa.Integer(), nullable=False),
        sa.Column("comment_points", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_fid"], ["users.fid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_fid"),
    )
    op.create_index("ix_user_points_total_points", "user_points", ["total_points"])

    op.create_table(
        "voices",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("user_fid", sa.BigInteger(), nullable=False),
        sa.Column("audio_data", sa.LargeBinary(), nullable=True),
        sa.Column("audio_mime_type", sa.Text(), nullable=True),
        sa.Column("audio_url", sa.Text(), nullable=True),
        sa.Column("duration", sa.Float(), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_fid"], ["users.fid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_voices_created_at", "voices", ["created_at"])
    op.create_index("ix_voices_user_fid", "voices", ["user_fid"])

    op.create_table(
        "voice_likes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_fid", sa.BigInteger(), nullable=False),
        sa.Column("voice_id", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_fid"], ["users.fid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voice_id"], ["voices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_fid", "voice_id", name="uq_voice_likes_user_voice"),
    )
    op.create_index("ix_voice_likes_voice_id", "voice_likes", ["voice_id"])

    op.create_table(
        "voice_comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_fid", sa.BigInteger(), nullable=False),
        sa.Column("voice_id", sa.String(length=32), nullable=False),
        sa.Column("kind", comment_kind, nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("audio_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_fid"], ["users.fid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voice_id"], ["voices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_voice_comments_voice_created", "voice_comments", ["voice_id", "created_at"]
    )

    op.create_table(
        "voice_views",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("voice_id", sa.String(length=32), nullable=False),
        sa.Column("user_fid", sa.BigInteger(), nullable=True),
        sa.Column("ip_address", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_fid"], ["users.fid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voice_id"], ["voices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("voice_id", "user_fid", name="uq_voice_views_voice_user"),
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("recipient_fid", sa.BigInteger(), nullable=False),
        sa.Column("sender_fid", sa.BigInteger(), nullable=False),
        sa.Column("type", notification_type, nullable=False),
        sa.Column("voice_id", sa.String(length=32), nullable=True),
        sa.Column("comment_id", sa.Integer(), nullable=True),
        sa.Column("read", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["recipient_fid"], ["users.fid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_fid"], ["users.fid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voice_id"], ["voices.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["comment_id"], ["voice_comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_notifications_recipient_created", "notifications", ["recipient_fid", "created_at"]
    )
    op.create_index("ix_notifications_recipient_read", "notifications", ["recipient_fid", "read"])

    op.create_table(
        "voice_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_fid", sa.BigInteger(), nullable=False),
        sa.Column("voice_id", sa.String(length=32), nullable=False),
        sa.Column("shown_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_fid"], ["users.fid"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voice_id"], ["voices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_voice_history_user_shown", "voice_history", ["user_fid", "shown_at"])
    op.create_index("ix_voice_history_shown_at", "voice_history", ["shown_at"])


def downgrade() -> None:
    """Drop every Voice Social table."""
    op.drop_index("ix_voice_history_shown_at", table_name="voice_history")
    op.drop_index("ix_voice_history_user_shown", table_name="voice_history")
    op.drop_table("voice_history")
    op.drop_index("ix_notifications_recipient_read", table_name="notifications")
    op.drop_index("ix_notifications_recipient_created", table_name="notifications")
    op.drop_table("notifications")
    op.drop_table("voice_views")
    op.drop_index("ix_voice_comments_voice_created", table_name="voice_comments")
    op.drop_table("voice_comments")
    op.drop_index("ix_voice_likes_voice_id", table_name="voice_likes")
    op.drop_table("voice_likes")
    op.drop_index("ix_voices_user_fid", table_name="voices")
    op.drop_index("ix_voices_created_at", table_name="voices")
    op.drop_table("voices")
    op.drop_index("ix_user_points_total_points", table_name="user_points")
    op.drop_table("user_points")
    op.drop_table("users")
    notification_type.drop(op.get_bind(), checkfirst=True)
    comment_kind.drop(op.get_bind(), checkfirst=True)
