"""Voice rotation: keep recently served voices out of a user's next feed.

Selection is recency-ordered; truly random sampling is not implemented.
History rows older than the retention window can no longer affect selection
and are removed by :func:`prune_history`.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from voice_social.core.settings import settings
from voice_social.db.time import utcnow, window_start
from voice_social.models import Voice, VoiceHistory

__all__ = ["prune_history", "select_voices"]

logger = logging.getLogger(__name__)

# Rows removed per DELETE when pruning, to keep lock times short.
PRUNE_BATCH_SIZE = 5_000


def _record_history(db: Session, user_fid: int, voices: list[Voice], shown_at: datetime) -> None:
    try:
        with db.begin_nested():
            db.add_all(
                VoiceHistory(user_fid=user_fid, voice_id=voice.id, shown_at=shown_at)
                for voice in voices
            )
    except SQLAlchemyError:
        logger.warning(
            "Failed to record voice history for user %s", user_fid, exc_info=True
        )


def select_voices(
    db: Session,
    count: int,
    user_fid: int | None = None,
    *,
    offset: int = 0,
    now: datetime | None = None,
) -> list[Voice]:
    """Pick up to ``count`` voices, newest first.

    Without ``user_fid`` this is a plain page of the most recent voices
    starting at ``offset``. With ``user_fid``, voices served to that user
    within the rotation window are skipped, and the voices returned are
    recorded as served. Recording is best-effort: a failure is logged and the
    selection is still returned. Fewer than ``count`` voices come back once
    the pool runs dry.
    """
    if count <= 0:
        return []
    stmt = (
        select(Voice)
        .options(selectinload(Voice.user))
        .order_by(Voice.created_at.desc(), Voice.id.desc())
        .limit(count)
    )
    if user_fid is None:
        return list(db.scalars(stmt.offset(max(offset, 0))))

    now = now or utcnow()
    since = window_start(hours=settings.rotation_window_hours, now=now)
    shown = (
        select(VoiceHistory.voice_id)
        .where(VoiceHistory.user_fid == user_fid, VoiceHistory.shown_at >= since)
    )
    voices = list(db.scalars(stmt.where(Voice.id.not_in(shown))))
    if voices:
        _record_history(db, user_fid, voices, now)
    return voices


def prune_history(db: Session, older_than: datetime | None = None) -> int:
    """Delete rotation records older than ``older_than``.

    Defaults to the history retention window. Deletes in batches and commits
    after each one; returns the number of rows removed.
    """
    cutoff = older_than or window_start(hours=settings.history_retention_hours)
    deleted = 0
    while True:
        ids = db.scalars(
            select(VoiceHistory.id).where(VoiceHistory.shown_at < cutoff).limit(PRUNE_BATCH_SIZE)
        ).all()
        if not ids:
            break
        db.execute(
            delete(VoiceHistory)
            .where(VoiceHistory.id.in_(ids))
            .execution_options(synchronize_session=False)
        )
        db.commit()
        deleted += len(ids)
    logger.info("Pruned %d voice history rows older than %s", deleted, cutoff.isoformat())
    return deleted
