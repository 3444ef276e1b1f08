"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentOut
from .common import APIModel, ErrorResponse
from .leaderboard import LeaderboardEntry, LeaderboardOut
from .notification import MarkReadRequest, MarkReadResult, NotificationList, NotificationOut
from .user import ProfileFields, ProfileStats, UserBrief, UserOut, UserSave
from .voice import ActorRequest, LikeResult, ProfileOut, VoiceOut, VoicePage, ViewResult

__all__ = [
    "APIModel", "ErrorResponse",
    "CommentCreate", "CommentOut",
    "LeaderboardEntry", "LeaderboardOut",
    "MarkReadRequest", "MarkReadResult", "NotificationList", "NotificationOut",
    "ProfileFields", "ProfileStats", "UserBrief", "UserOut", "UserSave",
    "ActorRequest", "LikeResult", "ProfileOut", "VoiceOut", "VoicePage", "ViewResult",
]
