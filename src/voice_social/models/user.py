"""SQLAlchemy models for Farcaster users and their points."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from voice_social.db.session import Base
from voice_social.db.time import utcnow

if TYPE_CHECKING:
    from .voice import Voice


class User(Base):
    """Farcaster identity keyed by its fid.

    Rows are created on first reference by any action that names a user and
    are never deleted in normal operation.
    """

    __tablename__ = "users"

    fid: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    username: Mapped[str] = mapped_column(Text, nullable=False)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    pfp_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    points: Mapped[UserPoints | None] = relationship(
        "UserPoints",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )
    voices: Mapped[list[Voice]] = relationship(
        "Voice",
        back_populates="user",
        order_by="desc(Voice.created_at)",
    )


class UserPoints(Base):
    """Per-user score split into view, like and comment sub-totals.

    ``total_points`` always equals the sum of the three sub-totals; every
    mutation updates a sub-total and the aggregate in the same statement.
    """

    __tablename__ = "user_points"

    # Surrogate key keeps insertion order available as a leaderboard tie-break.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_fid: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.fid", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    view_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    user: Mapped[User] = relationship("User", back_populates="points")
