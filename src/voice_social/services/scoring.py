"""Point bookkeeping for voice owners.

Points are changed with relative ``UPDATE`` statements so concurrent
interactions never overwrite each other's increments. Each statement moves a
sub-total and ``total_points`` together, which keeps the aggregate equal to
the sum of the sub-totals. Sub-totals are clamped at zero on decrement and the
aggregate moves by the clamped amount.
"""
from __future__ import annotations

from typing import Literal

from sqlalchemy import case, update
from sqlalchemy.orm import InstrumentedAttribute, Session

from voice_social.core.errors import StorageError
from voice_social.models import UserPoints

__all__ = ["PointKind", "apply_points", "get_points"]

PointKind = Literal["view", "like", "comment"]

_SUBTOTALS: dict[str, InstrumentedAttribute[int]] = {
    "view": UserPoints.view_points,
    "like": UserPoints.like_points,
    "comment": UserPoints.comment_points,
}


def apply_points(db: Session, fid: int, kind: PointKind, delta: int) -> None:
    """Add ``delta`` (possibly negative) to ``fid``'s ``kind`` points.

    Raises:
        StorageError: If the user has no points row.
    """
    column = _SUBTOTALS[kind]
    if delta >= 0:
        new_value = column + delta
    else:
        new_value = case((column + delta < 0, 0), else_=column + delta)

    db.flush()
    result = db.execute(
        update(UserPoints)
        .where(UserPoints.user_fid == fid)
        .values(
            {
                column: new_value,
                UserPoints.total_points: UserPoints.total_points - column + new_value,
            }
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise StorageError(f"No points record for user {fid}")

    # Loaded copies of this row are stale now.
    for obj in list(db.identity_map.values()):
        if isinstance(obj, UserPoints) and obj.user_fid == fid:
            db.expire(obj)


def get_points(db: Session, fid: int) -> UserPoints | None:
    """Return the current points row for ``fid``."""
    return db.query(UserPoints).filter(UserPoints.user_fid == fid).populate_existing().first()
