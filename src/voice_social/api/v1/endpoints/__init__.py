"""API endpoint modules for version 1."""

from .leaderboard import router as leaderboard_router
from .notifications import router as notifications_router
from .users import router as users_router
from .voices import router as voices_router

__all__ = [
    "leaderboard_router",
    "notifications_router",
    "users_router",
    "voices_router",
]
