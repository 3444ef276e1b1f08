"""Notification dispatch and read-state handling."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from voice_social.core.settings import settings
from voice_social.models import Notification, NotificationType
from voice_social.schemas.notification import NotificationOut
from voice_social.schemas.user import UserBrief

__all__ = [
    "create_notification",
    "list_notifications",
    "mark_read",
    "to_notification_out",
    "unread_count",
]

logger = logging.getLogger(__name__)


def create_notification(
    db: Session,
    *,
    recipient_fid: int,
    sender_fid: int,
    type_: NotificationType,
    voice_id: str | None = None,
    comment_id: int | None = None,
) -> Notification | None:
    """Record a notification for ``recipient_fid``.

    Nothing is created when the sender is the recipient.
    """
    if recipient_fid == sender_fid:
        return None
    notification = Notification(
        recipient_fid=recipient_fid,
        sender_fid=sender_fid,
        type=type_,
        voice_id=voice_id,
        comment_id=comment_id,
        read=False,
    )
    db.add(notification)
    db.flush()
    logger.debug(
        "Notification %s: %s -> %s (%s)", notification.id, sender_fid, recipient_fid, type_.value
    )
    return notification


def unread_count(db: Session, fid: int) -> int:
    """Count every unread notification for ``fid``."""
    return db.scalar(
        select(func.count())
        .select_from(Notification)
        .where(Notification.recipient_fid == fid, Notification.read.is_(False))
    ) or 0


def list_notifications(
    db: Session,
    fid: int,
    *,
    unread_only: bool = False,
    limit: int | None = None,
) -> tuple[list[Notification], int]:
    """Return the most recent notifications for ``fid`` and the unread total.

    At most ``limit`` (default ``NOTIFICATION_FETCH_LIMIT``) rows are returned,
    newest first; the unread count is not limited.
    """
    limit = limit or settings.notification_fetch_limit
    stmt = (
        select(Notification)
        .where(Notification.recipient_fid == fid)
        .options(selectinload(Notification.sender))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
    )
    if unread_only:
        stmt = stmt.where(Notification.read.is_(False))
    notifications = list(db.scalars(stmt))
    return notifications, unread_count(db, fid)


def mark_read(db: Session, fid: int, notification_ids: Sequence[int] | None = None) -> int:
    """Mark notifications addressed to ``fid`` as read.

    With ``notification_ids`` only those rows are touched, otherwise every
    unread one. Rows already read are left alone. Returns the number of rows
    that changed.
    """
    stmt = update(Notification).where(
        Notification.recipient_fid == fid,
        Notification.read.is_(False),
    )
    if notification_ids is not None:
        if not notification_ids:
            return 0
        stmt = stmt.where(Notification.id.in_(list(notification_ids)))
    db.flush()
    result = db.execute(stmt.values(read=True).execution_options(synchronize_session=False))
    for obj in list(db.identity_map.values()):
        if isinstance(obj, Notification) and obj.recipient_fid == fid:
            db.expire(obj)
    return result.rowcount or 0


def to_notification_out(notification: Notification) -> NotificationOut:
    """Convert a Notification row, with its sender, into the API schema."""
    return NotificationOut(
        id=notification.id,
        recipient_fid=notification.recipient_fid,
        sender_fid=notification.sender_fid,
        type=notification.type.value,
        voice_id=notification.voice_id,
        comment_id=notification.comment_id,
        read=notification.read,
        created_at=notification.created_at,
        sender=UserBrief.model_validate(notification.sender),
    )
