"""Voice endpoints: upload, feed, likes, views, comments and audio."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Body, File, Form, Query, Response, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError

from voice_social.core.errors import ValidationError
from voice_social.core.settings import settings
from voice_social.schemas.common import ERROR_RESPONSES, MAX_FID
from voice_social.schemas.comment import CommentCreate, CommentOut
from voice_social.schemas.user import ProfileFields
from voice_social.schemas.voice import ActorRequest, LikeResult, VoiceOut, VoicePage, ViewResult
from voice_social.services import ledger
from voice_social.services.identity import ensure_user
from voice_social.services.rotation import select_voices
from voice_social.services.voices import create_voice, get_voice, summarize_voices

from ..dependencies import AudioStorageDep, ClientAddressDep, SessionDep

router = APIRouter(prefix="/voices", tags=["voices"], responses=ERROR_RESPONSES)
logger = logging.getLogger(__name__)

MAX_FEED_LIMIT = 50


def _parse_fid(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        fid = int(raw.strip())
    except ValueError as err:
        raise ValidationError("Invalid user FID") from err
    if not 0 < fid <= MAX_FID:
        raise ValidationError("Invalid user FID")
    return fid


def _parse_duration(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as err:
        raise ValidationError("Duration must be a number") from err


@router.post("/upload", response_model=VoiceOut, status_code=status.HTTP_201_CREATED)
async def upload_voice(
    db: SessionDep,
    storage: AudioStorageDep,
    audio: Annotated[UploadFile | None, File()] = None,
    user_fid: Annotated[str | None, Form(alias="userFid")] = None,
    duration: Annotated[str | None, Form()] = None,
    is_anonymous: Annotated[str, Form(alias="isAnonymous")] = "false",
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    username: Annotated[str | None, Form()] = None,
    display_name: Annotated[str | None, Form(alias="displayName")] = None,
    pfp_url: Annotated[str | None, Form(alias="pfpUrl")] = None,
) -> VoiceOut:
    """Store a recorded voice and refresh the uploader's profile fields."""
    if audio is None:
        raise ValidationError("Missing required fields")
    data = await audio.read()
    voice = create_voice(
        db,
        storage,
        user_fid=_parse_fid(user_fid),
        data=data,
        mime_type=audio.content_type,
        duration=_parse_duration(duration),
        title=title,
        description=description,
        is_anonymous=is_anonymous.strip().lower() == "true",
        profile=ProfileFields(username=username, display_name=display_name, pfp_url=pfp_url),
    )
    try:
        db.commit()
    except SQLAlchemyError:
        storage.discard(voice)
        raise
    return summarize_voices(db, [voice])[0]


@router.get("/random", response_model=VoicePage)
async def random_voices(
    db: SessionDep,
    limit: int = Query(10, description="Number of voices to return (1-50)"),
    page: int = Query(1, ge=1, description="Page number when no user is given"),
    user_fid: int | None = Query(None, alias="userFid", gt=0, le=MAX_FID),
) -> VoicePage:
    """Return a page of voices, skipping ones this user saw in the last day."""
    limit = max(1, min(limit, MAX_FEED_LIMIT))
    if user_fid is not None:
        ensure_user(db, user_fid)
        voices = select_voices(db, limit, user_fid)
    else:
        voices = select_voices(db, limit, offset=(page - 1) * limit)
    db.commit()
    return VoicePage(
        voices=summarize_voices(db, voices),
        page=page,
        limit=limit,
        has_more=len(voices) == limit,
    )


@router.get("/{voice_id}", response_model=VoiceOut)
async def get_voice_summary(voice_id: str, db: SessionDep) -> VoiceOut:
    """Return one voice with its interaction summary."""
    return summarize_voices(db, [get_voice(db, voice_id)])[0]


@router.post("/{voice_id}/like", response_model=LikeResult)
async def toggle_like(voice_id: str, body: ActorRequest, db: SessionDep) -> LikeResult:
    """Like the voice, or remove an existing like."""
    ensure_user(db, body.user_fid)
    result = ledger.toggle_like(db, body.user_fid, voice_id)
    db.commit()
    return LikeResult(liked=result.liked, like_count=result.like_count)


@router.post("/{voice_id}/view", response_model=ViewResult)
async def record_view(
    voice_id: str,
    db: SessionDep,
    client_address: ClientAddressDep,
    body: Annotated[ActorRequest | None, Body()] = None,
) -> ViewResult:
    """Count a play; anonymous callers are identified by address."""
    user_fid = body.user_fid if body else None
    if user_fid is not None:
        ensure_user(db, user_fid)
    recorded = ledger.record_view(
        db,
        voice_id,
        user_fid=user_fid,
        client_address=None if user_fid is not None else client_address,
    )
    db.commit()
    return ViewResult(
        recorded=recorded,
        message="View recorded" if recorded else "View already recorded",
    )


@router.get("/{voice_id}/comments", response_model=list[CommentOut])
async def list_comments(voice_id: str, db: SessionDep) -> list[CommentOut]:
    """Return the voice's comments, oldest first."""
    return [ledger.to_comment_out(comment) for comment in ledger.list_comments(db, voice_id)]


@router.post(
    "/{voice_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(voice_id: str, body: CommentCreate, db: SessionDep) -> CommentOut:
    """Add a text or voice comment."""
    ensure_user(db, body.user_fid)
    comment = ledger.add_comment(
        db,
        voice_id,
        body.user_fid,
        body.type,
        content=body.content,
        audio_url=body.audio_url,
    )
    db.commit()
    return ledger.to_comment_out(comment)


@router.get("/{voice_id}/audio")
async def stream_audio(voice_id: str, db: SessionDep, storage: AudioStorageDep) -> Response:
    """Serve the stored audio bytes for a voice."""
    stored = storage.load(get_voice(db, voice_id))
    logger.debug("Serving audio for %s (%d bytes, %s)", voice_id, stored.size, stored.mime_type)
    return Response(
        content=stored.data,
        media_type=stored.mime_type,
        headers={
            "Cache-Control": f"public, max-age={settings.audio_cache_max_age}",
            "Accept-Ranges": "bytes",
        },
    )
