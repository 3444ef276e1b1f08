"""Models for recorded voice clips."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    LargeBinary,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voice_social.db.session import Base
from voice_social.db.time import utcnow

if TYPE_CHECKING:
    from .interaction import VoiceComment, VoiceLike, VoiceView
    from .notification import Notification
    from .user import User
    from .voice_history import VoiceHistory


def new_voice_id() -> str:
    return uuid.uuid4().hex


class Voice(Base):
    """A short audio clip shared by a user.

    Audio lives either inline (``audio_data`` + ``audio_mime_type``) or behind
    ``audio_url``; which one is used is decided by the configured storage
    backend, not by the caller.
    """

    __tablename__ = "voices"
    __table_args__ = (Index("ix_voices_created_at", "created_at"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_voice_id)
    user_fid: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.fid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Loaded only when audio is actually served.
    audio_data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True, deferred=True)
    audio_mime_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    audio_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[float] = mapped_column(Float, nullable=False)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user: Mapped[User] = relationship("User", back_populates="voices")
    likes: Mapped[list[VoiceLike]] = relationship(
        "VoiceLike",
        back_populates="voice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments: Mapped[list[VoiceComment]] = relationship(
        "VoiceComment",
        back_populates="voice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="VoiceComment.created_at",
    )
    views: Mapped[list[VoiceView]] = relationship(
        "VoiceView",
        back_populates="voice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    notifications: Mapped[list[Notification]] = relationship(
        "Notification",
        back_populates="voice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    history: Mapped[list[VoiceHistory]] = relationship(
        "VoiceHistory",
        back_populates="voice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
