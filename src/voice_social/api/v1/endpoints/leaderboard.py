"""Leaderboard endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Query

from voice_social.schemas.common import ERROR_RESPONSES
from voice_social.schemas.leaderboard import LeaderboardOut
from voice_social.services.leaderboard import get_leaderboard, parse_timeframe

from ..dependencies import SessionDep

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"], responses=ERROR_RESPONSES)


@router.get("", response_model=LeaderboardOut)
async def read_leaderboard(
    db: SessionDep,
    timeframe: str = Query("all", description="all, weekly or monthly"),
    limit: int | None = Query(None, ge=1, description="Maximum number of entries"),
) -> LeaderboardOut:
    """Return users ranked by total points."""
    parsed = parse_timeframe(timeframe)
    return LeaderboardOut(
        leaderboard=get_leaderboard(db, parsed, limit),
        timeframe=parsed.value,
    )
