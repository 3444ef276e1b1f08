"""Leaderboard projection over user points.

The weekly and monthly boards only admit users who uploaded a voice within
the window, but rank them by all-time points; points earned inside the
window are not tracked separately.
"""
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from voice_social.core.errors import ValidationError
from voice_social.core.settings import settings
from voice_social.db.time import window_start
from voice_social.models import User, UserPoints, Voice
from voice_social.schemas.leaderboard import LeaderboardEntry
from voice_social.schemas.user import UserBrief

__all__ = ["Timeframe", "get_leaderboard", "parse_timeframe", "rank_of"]


class Timeframe(str, enum.Enum):
    ALL = "all"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def parse_timeframe(value: str | Timeframe | None) -> Timeframe:
    """Return the timeframe named by ``value`` (default ``all``).

    Raises:
        ValidationError: For unknown names.
    """
    if isinstance(value, Timeframe):
        return value
    if not value:
        return Timeframe.ALL
    try:
        return Timeframe(value.strip().lower())
    except ValueError as err:
        raise ValidationError(f"Unknown timeframe: {value!r}") from err


def _window_start(timeframe: Timeframe, now: datetime | None) -> datetime | None:
    if timeframe is Timeframe.WEEKLY:
        return window_start(days=settings.leaderboard_weekly_days, now=now)
    if timeframe is Timeframe.MONTHLY:
        return window_start(days=settings.leaderboard_monthly_days, now=now)
    return None


def get_leaderboard(
    db: Session,
    timeframe: str | Timeframe | None = Timeframe.ALL,
    limit: int | None = None,
    *,
    now: datetime | None = None,
) -> list[LeaderboardEntry]:
    """Return users ordered by total points, best first.

    Ties keep the order in which points rows were created. Ranks are 1-based
    positions in the returned list.
    """
    timeframe = parse_timeframe(timeframe)
    limit = limit or settings.leaderboard_default_limit
    limit = max(1, min(limit, settings.leaderboard_max_limit))

    voice_count = (
        select(func.count(Voice.id))
        .where(Voice.user_fid == UserPoints.user_fid)
        .correlate(UserPoints)
        .scalar_subquery()
    )
    stmt = (
        select(UserPoints, User, voice_count)
        .join(User, User.fid == UserPoints.user_fid)
        .order_by(UserPoints.total_points.desc(), UserPoints.id.asc())
        .limit(limit)
    )
    since = _window_start(timeframe, now)
    if since is not None:
        stmt = stmt.where(
            select(Voice.id)
            .where(Voice.user_fid == UserPoints.user_fid, Voice.created_at >= since)
            .exists()
        )

    return [
        LeaderboardEntry(
            rank=position,
            user=UserBrief.model_validate(user),
            total_points=points.total_points,
            view_points=points.view_points,
            like_points=points.like_points,
            comment_points=points.comment_points,
            voices_count=voices,
        )
        for position, (points, user, voices) in enumerate(db.execute(stmt).all(), start=1)
    ]


def rank_of(db: Session, total_points: int) -> int:
    """Return 1 + the number of users with strictly more points."""
    ahead = db.scalar(
        select(func.count()).select_from(UserPoints).where(UserPoints.total_points > total_points)
    ) or 0
    return ahead + 1
