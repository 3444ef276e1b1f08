"""UTC clock helpers shared by models and time-windowed queries.

Timestamps are written timezone-aware; SQLite stores them without an offset,
so every comparison must stay in UTC.
"""

from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    return datetime.now(UTC)


def window_start(*, hours: float = 0, days: float = 0, now: datetime | None = None) -> datetime:
    """Return the start of a lookback window ending at ``now`` (default: the present)."""
    return (now or utcnow()) - timedelta(hours=hours, days=days)
