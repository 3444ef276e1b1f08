"""Models capturing likes, comments and views on voices."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voice_social.db.session import Base
from voice_social.db.time import utcnow

if TYPE_CHECKING:
    from .user import User
    from .voice import Voice


class CommentKind(str, enum.Enum):
    """Whether a comment carries text or a recorded reply."""

    TEXT = "text"
    VOICE = "voice"


class VoiceLike(Base):
    """A user's like on a voice.

    Removing a like deletes the row; the unique pair is the only guard
    against duplicate likes under concurrent toggles.
    """

    __tablename__ = "voice_likes"
    __table_args__ = (
        UniqueConstraint("user_fid", "voice_id", name="uq_voice_likes_user_voice"),
        Index("ix_voice_likes_voice_id", "voice_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_fid: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.fid", ondelete="CASCADE"),
        nullable=False,
    )
    voice_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("voices.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    voice: Mapped[Voice] = relationship("Voice", back_populates="likes")


class VoiceComment(Base):
    """Append-only comment on a voice, either text or a voice reply."""

    __tablename__ = "voice_comments"
    __table_args__ = (Index("ix_voice_comments_voice_created", "voice_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_fid: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.fid", ondelete="CASCADE"),
        nullable=False,
    )
    voice_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("voices.id", ondelete="CASCADE"),
        nullable=False,
    )
    kind: Mapped[CommentKind] = mapped_column(
        Enum(CommentKind, name="comment_kind", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=CommentKind.TEXT,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    audio_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    voice: Mapped[Voice] = relationship("Voice", back_populates="comments")
    user: Mapped[User] = relationship("User")


class VoiceView(Base):
    """A play of a voice, by a known user or by an anonymous client address.

    A known user has at most one row per voice.
    """

    __tablename__ = "voice_views"
    # Anonymous rows have a NULL user_fid, which never collides.
    __table_args__ = (
        UniqueConstraint("voice_id", "user_fid", name="uq_voice_views_voice_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voice_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("voices.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_fid: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("users.fid", ondelete="CASCADE"),
        nullable=True,
    )
    ip_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    voice: Mapped[Voice] = relationship("Voice", back_populates="views")
