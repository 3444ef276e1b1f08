"""Comment schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import APIModel, FidIn, FidOut
from .user import UserBrief


class CommentCreate(APIModel):
    """Body of ``POST /voices/{id}/comments``.

    ``type`` is ``TEXT`` or ``VOICE`` (case-insensitive); the service checks
    that the matching content field is present.
    """

    user_fid: FidIn | None = None
    type: str = Field("TEXT", description="TEXT or VOICE")
    content: str | None = Field(None, max_length=2000)
    audio_url: str | None = None


class CommentOut(APIModel):
    id: int
    voice_id: str
    user_fid: FidOut
    type: str
    content: str
    audio_url: str | None = None
    created_at: datetime
    user: UserBrief
