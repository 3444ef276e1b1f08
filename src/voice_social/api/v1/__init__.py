"""Version 1 API endpoints."""

from .endpoints import (
    leaderboard_router,
    notifications_router,
    users_router,
    voices_router,
)

__all__ = [
    "leaderboard_router",
    "notifications_router",
    "users_router",
    "voices_router",
]
