"""Voice and interaction schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import APIModel, FidIn, FidOut
from .user import ProfileStats, UserBrief, UserOut


class LikeOut(APIModel):
    user_fid: FidOut


class VoiceOut(APIModel):
    """A voice with its author and interaction summary."""

    id: str
    user_fid: FidOut
    audio_url: str | None = None
    audio_mime_type: str | None = None
    playback_url: str
    duration: float
    title: str | None = None
    description: str | None = None
    is_anonymous: bool
    created_at: datetime
    user: UserBrief
    likes: list[LikeOut] = Field(default_factory=list)
    like_count: int = 0
    comment_count: int = 0
    view_count: int = 0


class VoicePage(APIModel):
    voices: list[VoiceOut]
    page: int
    limit: int
    has_more: bool


class ActorRequest(APIModel):
    """Body naming the acting user; the fid is optional where anonymity is allowed."""

    user_fid: FidIn | None = None


class LikeResult(APIModel):
    liked: bool
    like_count: int


class ViewResult(APIModel):
    recorded: bool
    message: str


class ProfileOut(UserOut):
    stats: ProfileStats
    voices: list[VoiceOut]
