"""Voice store: creating voices and rendering their summaries."""
from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from voice_social.core.errors import NotFoundError, ValidationError
from voice_social.core.settings import Settings, settings
from voice_social.models import Voice, VoiceComment, VoiceLike, VoiceView
from voice_social.models.voice import new_voice_id
from voice_social.schemas.user import ProfileFields, UserBrief
from voice_social.schemas.voice import LikeOut, VoiceOut
from voice_social.services.audio_storage import DEFAULT_MIME_TYPE, AudioStorage
from voice_social.services.identity import ensure_user

__all__ = [
    "create_voice",
    "get_voice",
    "playback_url",
    "summarize_voices",
    "validate_upload",
]

logger = logging.getLogger(__name__)


def get_voice(db: Session, voice_id: str) -> Voice:
    """Return the voice ``voice_id``.

    Raises:
        NotFoundError: If no such voice exists.
    """
    voice = db.get(Voice, voice_id)
    if voice is None:
        raise NotFoundError("Voice not found")
    return voice


def playback_url(voice: Voice) -> str:
    """Return the API path that streams this voice's audio."""
    return f"{settings.api_prefix}/voices/{voice.id}/audio"


def validate_upload(
    *,
    user_fid: int | None,
    size: int,
    mime_type: str | None,
    duration: float | None,
    config: Settings = settings,
) -> None:
    """Check an upload before anything is written.

    Raises:
        ValidationError: On a missing user id or duration, a non-audio MIME
            type, an out-of-range duration or a payload outside the size limits.
    """
    if user_fid is None or duration is None:
        raise ValidationError("Missing required fields")
    if not math.isfinite(duration) or duration <= 0:
        raise ValidationError("Duration must be a positive number of seconds")
    if duration > config.max_recording_duration_seconds:
        raise ValidationError(
            f"Recording is too long (max {config.max_recording_duration_seconds:g} seconds)"
        )
    if not mime_type or not mime_type.startswith("audio/"):
        raise ValidationError("Invalid file type")
    if size < config.min_audio_bytes:
        raise ValidationError(
            f"File too small, minimum {config.min_audio_bytes} bytes required",
            size=size,
        )
    if size > config.max_audio_bytes:
        raise ValidationError(
            f"File too large, maximum {config.max_audio_bytes} bytes allowed",
            size=size,
        )


def create_voice(
    db: Session,
    storage: AudioStorage,
    *,
    user_fid: int | None,
    data: bytes,
    mime_type: str | None,
    duration: float | None,
    title: str | None = None,
    description: str | None = None,
    is_anonymous: bool = False,
    profile: ProfileFields | None = None,
    config: Settings = settings,
) -> Voice:
    """Validate and persist a new voice owned by ``user_fid``.

    The owner is created or refreshed with the supplied profile fields first,
    then the audio is handed to ``storage``. If the row cannot be written the
    stored audio is discarded again; a caller that commits later should do the
    same when its commit fails.
    """
    validate_upload(
        user_fid=user_fid,
        size=len(data),
        mime_type=mime_type,
        duration=duration,
        config=config,
    )
    user = ensure_user(db, user_fid, profile)

    voice = Voice(
        id=new_voice_id(),
        user_fid=user.fid,
        duration=float(duration),
        title=title or f"Voice by {user.display_name or user.username}",
        description=description or "",
        is_anonymous=is_anonymous,
    )
    storage.save(voice, data, mime_type or DEFAULT_MIME_TYPE)
    try:
        db.add(voice)
        db.flush()
    except SQLAlchemyError:
        storage.discard(voice)
        raise
    logger.info(
        "Stored voice %s for %s (%d bytes, %s, %s backend)",
        voice.id,
        user.fid,
        len(data),
        voice.audio_mime_type,
        storage.name,
    )
    return voice


def summarize_voices(db: Session, voices: Sequence[Voice]) -> list[VoiceOut]:
    """Attach author, likes and interaction counts to each voice."""
    ids = [voice.id for voice in voices]
    if not ids:
        return []

    likers: dict[str, list[int]] = defaultdict(list)
    for voice_id, user_fid in db.execute(
        select(VoiceLike.voice_id, VoiceLike.user_fid)
        .where(VoiceLike.voice_id.in_(ids))
        .order_by(VoiceLike.id)
    ):
        likers[voice_id].append(user_fid)

    comment_counts = dict(
        db.execute(
            select(VoiceComment.voice_id, func.count())
            .where(VoiceComment.voice_id.in_(ids))
            .group_by(VoiceComment.voice_id)
        ).all()
    )
    view_counts = dict(
        db.execute(
            select(VoiceView.voice_id, func.count())
            .where(VoiceView.voice_id.in_(ids))
            .group_by(VoiceView.voice_id)
        ).all()
    )

    return [
        VoiceOut(
            id=voice.id,
            user_fid=voice.user_fid,
            audio_url=voice.audio_url,
            audio_mime_type=voice.audio_mime_type,
            playback_url=playback_url(voice),
            duration=voice.duration,
            title=voice.title,
            description=voice.description,
            is_anonymous=voice.is_anonymous,
            created_at=voice.created_at,
            user=UserBrief.model_validate(voice.user),
            likes=[LikeOut(user_fid=fid) for fid in likers[voice.id]],
            like_count=len(likers[voice.id]),
            comment_count=comment_counts.get(voice.id, 0),
            view_count=view_counts.get(voice.id, 0),
        )
        for voice in voices
    ]
