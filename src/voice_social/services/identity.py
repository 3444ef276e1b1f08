"""Identity resolution: make sure a user and their points row exist."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from voice_social.core.errors import ValidationError
from voice_social.models import User, UserPoints
from voice_social.schemas.user import ProfileFields

__all__ = ["default_username", "ensure_user", "upsert_user"]

logger = logging.getLogger(__name__)


def default_username(fid: int) -> str:
    """Return the handle given to users who have not supplied one."""
    return f"user_{fid}"


def _supplied_fields(profile: ProfileFields | None) -> dict[str, Any]:
    if profile is None:
        return {}
    # Empty strings count as "not supplied", matching what clients send for blanks.
    return {
        key: value
        for key, value in profile.model_dump(exclude_none=True).items()
        if value != ""
    }


def _ensure_points(db: Session, fid: int) -> None:
    if db.scalar(select(UserPoints.id).where(UserPoints.user_fid == fid)) is not None:
        return
    try:
        with db.begin_nested():
            db.add(UserPoints(user_fid=fid))
    except IntegrityError:
        logger.debug("Points row for %s was created concurrently", fid)


def upsert_user(
    db: Session,
    fid: int | None,
    profile: ProfileFields | None = None,
) -> tuple[User, bool]:
    """Create or partially update the user ``fid``.

    Only profile fields that were supplied are written; everything else keeps
    its stored value. A zeroed points row is created alongside new users.

    Returns:
        The user and whether it was created by this call.

    Raises:
        ValidationError: If ``fid`` is missing.
    """
    if fid is None:
        raise ValidationError("User FID is required")

    fields = _supplied_fields(profile)
    created = False
    user = db.get(User, fid)
    if user is None:
        try:
            with db.begin_nested():
                user = User(fid=fid, username=fields.pop("username", None) or default_username(fid))
                for key, value in fields.items():
                    setattr(user, key, value)
                db.add(user)
            created = True
        except IntegrityError:
            # Another request inserted the same fid first; merge into its row.
            logger.info("User %s was created concurrently, updating instead", fid)
            user = db.get(User, fid, populate_existing=True)
            if user is None:  # pragma: no cover - row vanished between statements
                raise
            for key, value in _supplied_fields(profile).items():
                setattr(user, key, value)
    else:
        for key, value in fields.items():
            setattr(user, key, value)

    _ensure_points(db, fid)
    db.flush()
    if created:
        logger.info("Created user %s (%s)", fid, user.username)
    return user, created


def ensure_user(db: Session, fid: int | None, profile: ProfileFields | None = None) -> User:
    """Return the user ``fid``, creating it and its points row if needed."""
    user, _ = upsert_user(db, fid, profile)
    return user
