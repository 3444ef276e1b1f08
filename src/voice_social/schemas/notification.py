"""Notification schemas."""
from __future__ import annotations

from datetime import datetime

from .common import APIModel, FidIn, FidOut
from .user import UserBrief


class NotificationOut(APIModel):
    id: int
    recipient_fid: FidOut
    sender_fid: FidOut
    type: str
    voice_id: str | None = None
    comment_id: int | None = None
    read: bool
    created_at: datetime
    sender: UserBrief


class NotificationList(APIModel):
    notifications: list[NotificationOut]
    unread_count: int


class MarkReadRequest(APIModel):
    """Marks the listed notifications read, or all unread ones when omitted."""

    user_fid: FidIn | None = None
    notification_ids: list[int] | None = None


class MarkReadResult(APIModel):
    updated: int
