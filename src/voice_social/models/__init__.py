"""SQLAlchemy models for the Voice Social application."""

from .interaction import CommentKind, VoiceComment, VoiceLike, VoiceView
from .notification import Notification, NotificationType
from .user import User, UserPoints
from .voice import Voice
from .voice_history import VoiceHistory

__all__ = [
    "CommentKind", "VoiceComment", "VoiceLike", "VoiceView",
    "Notification", "NotificationType",
    "User", "UserPoints",
    "Voice",
    "VoiceHistory",
]
