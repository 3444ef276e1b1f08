"""User profile with aggregate stats."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from voice_social.core.errors import NotFoundError
from voice_social.models import User, UserPoints, Voice, VoiceComment, VoiceLike, VoiceView
from voice_social.schemas.user import ProfileStats
from voice_social.schemas.voice import ProfileOut
from voice_social.services.leaderboard import rank_of
from voice_social.services.voices import summarize_voices

__all__ = ["get_profile"]


def _count_on_voices(db: Session, model, fid: int) -> int:  # noqa: ANN001
    return db.scalar(
        select(func.count())
        .select_from(model)
        .join(Voice, Voice.id == model.voice_id)
        .where(Voice.user_fid == fid)
    ) or 0


def get_profile(db: Session, fid: int) -> ProfileOut:
    """Return ``fid``'s profile, stats, rank and voices (newest first).

    Likes, comments and views are those received on the user's own voices.

    Raises:
        NotFoundError: If the user does not exist.
    """
    user = db.get(User, fid)
    if user is None:
        raise NotFoundError("User not found")

    voices = list(
        db.scalars(
            select(Voice)
            .where(Voice.user_fid == fid)
            .options(selectinload(Voice.user))
            .order_by(Voice.created_at.desc(), Voice.id.desc())
        )
    )
    points = db.scalar(select(UserPoints).where(UserPoints.user_fid == fid))
    total_points = points.total_points if points else 0
    stats = ProfileStats(
        total_voices=len(voices),
        total_views=_count_on_voices(db, VoiceView, fid),
        total_likes=_count_on_voices(db, VoiceLike, fid),
        total_comments=_count_on_voices(db, VoiceComment, fid),
        total_points=total_points,
        view_points=points.view_points if points else 0,
        like_points=points.like_points if points else 0,
        comment_points=points.comment_points if points else 0,
        rank=rank_of(db, total_points),
    )
    return ProfileOut(
        fid=user.fid,
        username=user.username,
        display_name=user.display_name,
        pfp_url=user.pfp_url,
        bio=user.bio,
        created_at=user.created_at,
        stats=stats,
        voices=summarize_voices(db, voices),
    )
