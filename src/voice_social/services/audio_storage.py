"""Audio storage backends.

Voices keep their audio either inline in the database row or as files on
disk. Both live behind :class:`AudioStorage` so callers never branch on which
voice column happens to be populated; the backend is chosen by configuration
through :func:`build_audio_storage`.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from voice_social.core.errors import NotFoundError, StorageError, ValidationError
from voice_social.core.settings import Settings
from voice_social.models import Voice

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "audio/mpeg"

# Browsers report a handful of recorder formats that mimetypes does not know.
_EXTENSIONS = {
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/webm": ".webm",
    "audio/ogg": ".ogg",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/mp4": ".m4a",
    "audio/aac": ".aac",
}


@dataclass(frozen=True)
class StoredAudio:
    """Audio bytes ready to be streamed back to a client."""

    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


class AudioStorage(Protocol):
    """Interface implemented by every audio backend."""

    name: str

    def save(self, voice: Voice, data: bytes, mime_type: str) -> None:
        """Attach ``data`` to ``voice``; the voice must already have an id."""

    def load(self, voice: Voice) -> StoredAudio:
        """Return the audio for ``voice`` or raise :class:`NotFoundError`."""

    def discard(self, voice: Voice) -> None:
        """Drop audio written by :meth:`save` for a voice that was never persisted."""


def extension_for(mime_type: str) -> str:
    """Return a file extension for an audio MIME type."""
    base = mime_type.split(";", 1)[0].strip().lower()
    return _EXTENSIONS.get(base) or mimetypes.guess_extension(base) or ".bin"


class InlineBlobStorage:
    """Keeps audio bytes and their MIME type in the voice row."""

    name = "blob"

    def save(self, voice: Voice, data: bytes, mime_type: str) -> None:
        voice.audio_data = data
        voice.audio_mime_type = mime_type or DEFAULT_MIME_TYPE
        voice.audio_url = None

    def load(self, voice: Voice) -> StoredAudio:
        if voice.audio_data:
            return StoredAudio(
                data=bytes(voice.audio_data),
                mime_type=voice.audio_mime_type or DEFAULT_MIME_TYPE,
            )
        if voice.audio_url:
            # Legacy rows from before audio moved into the database.
            logger.info("Voice %s has no stored audio bytes, only %s", voice.id, voice.audio_url)
            raise NotFoundError(
                "Audio file not found in database, please re-upload",
                fallbackUrl=voice.audio_url,
            )
        raise NotFoundError("No audio data available")

    def discard(self, voice: Voice) -> None:
        # Bytes live in the row and go away with the rolled-back insert.
        pass


class FileAudioStorage:
    """Writes audio files under ``upload_dir`` and records their public URL."""

    name = "file"

    def __init__(self, upload_dir: Path, public_prefix: str = "/uploads/voices") -> None:
        self.upload_dir = Path(upload_dir)
        self.public_prefix = public_prefix.rstrip("/")

    def _path_for(self, voice: Voice) -> Path | None:
        if not voice.audio_url or not voice.audio_url.startswith(self.public_prefix + "/"):
            return None
        filename = voice.audio_url.rsplit("/", 1)[-1]
        return self.upload_dir / filename

    def save(self, voice: Voice, data: bytes, mime_type: str) -> None:
        if not voice.id:
            raise ValidationError("Voice must have an id before its audio is stored")
        filename = f"{voice.id}{extension_for(mime_type)}"
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            (self.upload_dir / filename).write_bytes(data)
        except OSError as exc:
            logger.error("Failed to write audio file %s: %s", filename, exc)
            raise StorageError("Failed to store audio file") from exc
        voice.audio_url = f"{self.public_prefix}/{filename}"
        voice.audio_mime_type = mime_type or DEFAULT_MIME_TYPE
        voice.audio_data = None

    def load(self, voice: Voice) -> StoredAudio:
        path = self._path_for(voice)
        if path is None or not path.is_file():
            raise NotFoundError("Audio file not found, please re-upload")
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.error("Failed to read audio file %s: %s", path, exc)
            raise StorageError("Failed to read audio file") from exc
        return StoredAudio(data=data, mime_type=voice.audio_mime_type or DEFAULT_MIME_TYPE)

    def discard(self, voice: Voice) -> None:
        path = self._path_for(voice)
        if path is None:
            return
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to remove orphaned audio file %s: %s", path, exc)


def build_audio_storage(config: Settings) -> AudioStorage:
    """Return the backend selected by ``AUDIO_STORAGE_BACKEND``."""
    backend = config.audio_storage_backend.lower()
    if backend == InlineBlobStorage.name:
        return InlineBlobStorage()
    if backend == FileAudioStorage.name:
        return FileAudioStorage(config.audio_upload_dir, config.audio_public_prefix)
    raise ValueError(f"Unknown audio storage backend: {config.audio_storage_backend!r}")
