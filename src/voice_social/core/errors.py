"""Domain errors surfaced to API clients.

Every error carries a machine-readable ``kind`` and the HTTP status code the
API layer should answer with. Extra keyword arguments are echoed back to the
client alongside the message.
"""

from __future__ import annotations

from typing import Any


class VoiceSocialError(Exception):
    """Base class for errors that map onto a failed API response."""

    kind = "VoiceSocialError"
    status_code = 500

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body describing this error."""
        return {"error": self.kind, "message": self.message, **self.extra}


class ValidationError(VoiceSocialError):
    """A required field is missing or malformed."""

    kind = "ValidationError"
    status_code = 400


class NotFoundError(VoiceSocialError):
    """A referenced voice, user or stored payload does not exist."""

    kind = "NotFoundError"
    status_code = 404


class StorageError(VoiceSocialError):
    """The persistence layer failed to complete an operation."""

    kind = "StorageError"
    status_code = 500
