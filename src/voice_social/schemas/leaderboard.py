"""Leaderboard schemas."""
from __future__ import annotations

from .common import APIModel
from .user import UserBrief


class LeaderboardEntry(APIModel):
    rank: int
    user: UserBrief
    total_points: int
    view_points: int
    like_points: int
    comment_points: int
    voices_count: int


class LeaderboardOut(APIModel):
    leaderboard: list[LeaderboardEntry]
    timeframe: str
