"""Interaction ledger: likes, comments and views on voices.

Each operation records the interaction, adjusts the voice owner's points and
emits a notification when someone other than the owner acted. Nothing here
commits; the caller commits once so that every step of an operation lands in
the same transaction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from voice_social.core.errors import ValidationError
from voice_social.core.settings import PointValues, settings
from voice_social.models import (
    CommentKind,
    NotificationType,
    VoiceComment,
    VoiceLike,
    VoiceView,
)
from voice_social.schemas.comment import CommentOut
from voice_social.schemas.user import UserBrief
from voice_social.services.notifications import create_notification
from voice_social.services.scoring import apply_points
from voice_social.services.voices import get_voice

__all__ = [
    "LikeToggle",
    "add_comment",
    "count_likes",
    "list_comments",
    "parse_comment_kind",
    "record_view",
    "to_comment_out",
    "toggle_like",
]

logger = logging.getLogger(__name__)

_KIND_ALIASES = {
    "text": CommentKind.TEXT,
    "voice": CommentKind.VOICE,
    "audio": CommentKind.VOICE,
    "audiourl": CommentKind.VOICE,
}


@dataclass(frozen=True)
class LikeToggle:
    """Outcome of a like toggle."""

    liked: bool
    like_count: int


def count_likes(db: Session, voice_id: str) -> int:
    """Count the likes on ``voice_id`` from the table itself."""
    return db.scalar(
        select(func.count()).select_from(VoiceLike).where(VoiceLike.voice_id == voice_id)
    ) or 0


def toggle_like(
    db: Session,
    user_fid: int,
    voice_id: str,
    points: PointValues | None = None,
) -> LikeToggle:
    """Like ``voice_id`` as ``user_fid``, or remove the like if present.

    The caller must have resolved ``user_fid`` beforehand. Calling twice
    toggles twice.

    Raises:
        NotFoundError: If the voice does not exist.
    """
    points = points or settings.points
    voice = get_voice(db, voice_id)

    existing = db.scalar(
        select(VoiceLike).where(VoiceLike.user_fid == user_fid, VoiceLike.voice_id == voice_id)
    )
    if existing is not None:
        db.delete(existing)
        db.flush()
        apply_points(db, voice.user_fid, "like", -points.like)
        liked = False
    else:
        try:
            with db.begin_nested():
                db.add(VoiceLike(user_fid=user_fid, voice_id=voice_id))
        except IntegrityError:
            # A concurrent toggle inserted the same pair and already scored it.
            logger.info("Like by %s on %s already recorded", user_fid, voice_id)
        else:
            apply_points(db, voice.user_fid, "like", points.like)
            create_notification(
                db,
                recipient_fid=voice.user_fid,
                sender_fid=user_fid,
                type_=NotificationType.LIKE,
                voice_id=voice_id,
            )
        liked = True

    return LikeToggle(liked=liked, like_count=count_likes(db, voice_id))


def parse_comment_kind(kind: str | CommentKind | None) -> CommentKind:
    """Map a client-supplied comment type onto :class:`CommentKind`.

    Raises:
        ValidationError: For unrecognized types.
    """
    if isinstance(kind, CommentKind):
        return kind
    if kind is None:
        return CommentKind.TEXT
    parsed = _KIND_ALIASES.get(kind.strip().lower())
    if parsed is None:
        raise ValidationError(f"Unrecognized comment type: {kind!r}")
    return parsed


def _is_resolvable_audio_ref(ref: str) -> bool:
    return ref.startswith(("http://", "https://", "/"))


def add_comment(
    db: Session,
    voice_id: str,
    user_fid: int | None,
    kind: str | CommentKind | None,
    content: str | None = None,
    audio_url: str | None = None,
    points: PointValues | None = None,
) -> VoiceComment:
    """Add a comment to ``voice_id``.

    Text comments need non-blank ``content``; voice comments need an
    ``audio_url`` that is an absolute URL or a site path. Commenting on
    someone else's voice credits them and notifies them.

    Raises:
        ValidationError: On a missing user id, unknown type or missing content.
        NotFoundError: If the voice does not exist.
    """
    if user_fid is None:
        raise ValidationError("User FID is required")
    points = points or settings.points
    voice = get_voice(db, voice_id)
    comment_kind = parse_comment_kind(kind)

    text = (content or "").strip()
    ref = (audio_url or "").strip()
    if comment_kind is CommentKind.TEXT and not text:
        raise ValidationError("Comment content is required")
    if comment_kind is CommentKind.VOICE and not (ref and _is_resolvable_audio_ref(ref)):
        raise ValidationError("Audio URL is required for voice comments")

    comment = VoiceComment(
        voice_id=voice_id,
        user_fid=user_fid,
        kind=comment_kind,
        content=text,
        audio_url=ref or None,
    )
    db.add(comment)
    db.flush()

    if user_fid != voice.user_fid:
        apply_points(db, voice.user_fid, "comment", points.comment)
        create_notification(
            db,
            recipient_fid=voice.user_fid,
            sender_fid=user_fid,
            type_=NotificationType.COMMENT,
            voice_id=voice_id,
            comment_id=comment.id,
        )
    return comment


def list_comments(db: Session, voice_id: str) -> list[VoiceComment]:
    """Return the comments on ``voice_id``, oldest first.

    Raises:
        NotFoundError: If the voice does not exist.
    """
    get_voice(db, voice_id)
    return list(
        db.scalars(
            select(VoiceComment)
            .where(VoiceComment.voice_id == voice_id)
            .order_by(VoiceComment.created_at.asc(), VoiceComment.id.asc())
        )
    )


def to_comment_out(comment: VoiceComment) -> CommentOut:
    """Convert a comment and its author into the API schema."""
    return CommentOut(
        id=comment.id,
        voice_id=comment.voice_id,
        user_fid=comment.user_fid,
        type=comment.kind.value,
        content=comment.content,
        audio_url=comment.audio_url,
        created_at=comment.created_at,
        user=UserBrief.model_validate(comment.user),
    )


def record_view(
    db: Session,
    voice_id: str,
    user_fid: int | None = None,
    client_address: str | None = None,
    points: PointValues | None = None,
) -> bool:
    """Record a view of ``voice_id``.

    Anonymous views are always stored, keyed by ``client_address``, and never
    score. A known user's first view of a voice is stored and credits the
    owner unless the viewer is the owner; later views by the same user are
    ignored.

    Returns:
        Whether a new view row was written.

    Raises:
        NotFoundError: If the voice does not exist.
    """
    points = points or settings.points
    voice = get_voice(db, voice_id)

    if user_fid is None:
        db.add(VoiceView(voice_id=voice_id, ip_address=client_address or "unknown"))
        db.flush()
        return True

    already_viewed = db.scalar(
        select(VoiceView.id)
        .where(VoiceView.voice_id == voice_id, VoiceView.user_fid == user_fid)
        .limit(1)
    )
    if already_viewed is not None:
        return False

    try:
        with db.begin_nested():
            db.add(VoiceView(voice_id=voice_id, user_fid=user_fid))
    except IntegrityError:
        # A concurrent first view by the same user won the unique pair.
        logger.info("View by %s on %s already recorded", user_fid, voice_id)
        return False
    if user_fid != voice.user_fid:
        apply_points(db, voice.user_fid, "view", points.view)
    return True
