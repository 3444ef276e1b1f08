"""In-app notifications sent when someone interacts with a user's voice."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voice_social.db.session import Base
from voice_social.db.time import utcnow

if TYPE_CHECKING:
    from .user import User
    from .voice import Voice


class NotificationType(str, enum.Enum):
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"


class Notification(Base):
    """Notification addressed to ``recipient_fid`` about ``sender_fid``'s action."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_recipient_created", "recipient_fid", "created_at"),
        Index("ix_notifications_recipient_read", "recipient_fid", "read"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipient_fid: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.fid", ondelete="CASCADE"),
        nullable=False,
    )
    sender_fid: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.fid", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[NotificationType] = mapped_column(
        Enum(
            NotificationType,
            name="notification_type",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    voice_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("voices.id", ondelete="CASCADE"),
        nullable=True,
    )
    comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("voice_comments.id", ondelete="CASCADE"),
        nullable=True,
    )
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    sender: Mapped[User] = relationship("User", foreign_keys=[sender_fid])
    voice: Mapped[Voice | None] = relationship("Voice", back_populates="notifications")
