"""User and profile schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import APIModel, FidIn, FidOut


class ProfileFields(APIModel):
    """Optional profile attributes; omitted fields leave stored values untouched."""

    username: str | None = Field(None, max_length=64)
    display_name: str | None = Field(None, max_length=128)
    pfp_url: str | None = None
    bio: str | None = Field(None, max_length=1000)


class UserSave(ProfileFields):
    """Body of ``POST /users/save``."""

    fid: FidIn | None = None


class UserBrief(APIModel):
    """Display fields embedded next to voices, comments and notifications."""

    fid: FidOut
    username: str
    display_name: str | None = None
    pfp_url: str | None = None


class UserOut(UserBrief):
    bio: str | None = None
    created_at: datetime


class ProfileStats(APIModel):
    total_voices: int
    total_views: int
    total_likes: int
    total_comments: int
    total_points: int
    view_points: int
    like_points: int
    comment_points: int
    rank: int
