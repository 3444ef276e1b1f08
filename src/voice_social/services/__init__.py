"""Business logic services for the Voice Social application."""

from .audio_storage import AudioStorage, FileAudioStorage, InlineBlobStorage, build_audio_storage
from .welcome import WelcomeNotifier

__all__ = [
    "AudioStorage",
    "FileAudioStorage",
    "InlineBlobStorage",
    "build_audio_storage",
    "WelcomeNotifier",
]
