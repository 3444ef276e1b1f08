"""Notification endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from voice_social.core.errors import ValidationError
from voice_social.schemas.common import ERROR_RESPONSES, MAX_FID
from voice_social.schemas.notification import MarkReadRequest, MarkReadResult, NotificationList
from voice_social.services import notifications as service

from ..dependencies import SessionDep

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=NotificationList)
async def list_notifications(
    db: SessionDep,
    user_fid: int | None = Query(None, alias="userFid", gt=0, le=MAX_FID),
    unread_only: bool = Query(False, alias="unreadOnly"),
) -> NotificationList:
    """Return the latest notifications and the unread total."""
    if user_fid is None:
        raise ValidationError("User FID is required")
    notifications, unread = service.list_notifications(db, user_fid, unread_only=unread_only)
    return NotificationList(
        notifications=[service.to_notification_out(n) for n in notifications],
        unread_count=unread,
    )


@router.post("", response_model=MarkReadResult)
async def mark_notifications_read(body: MarkReadRequest, db: SessionDep) -> MarkReadResult:
    """Mark some or all of the user's notifications as read."""
    if body.user_fid is None:
        raise ValidationError("User FID is required")
    updated = service.mark_read(db, body.user_fid, body.notification_ids)
    db.commit()
    return MarkReadResult(updated=updated)
