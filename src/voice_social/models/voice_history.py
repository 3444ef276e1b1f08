"""Rotation records: which voices were already served to which user."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voice_social.db.session import Base
from voice_social.db.time import utcnow

if TYPE_CHECKING:
    from .voice import Voice


class VoiceHistory(Base):
    """Append-only record that ``voice_id`` was shown to ``user_fid``."""

    __tablename__ = "voice_history"
    __table_args__ = (
        Index("ix_voice_history_user_shown", "user_fid", "shown_at"),
        Index("ix_voice_history_shown_at", "shown_at"),
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
    shown_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    voice: Mapped[Voice] = relationship("Voice", back_populates="history")
