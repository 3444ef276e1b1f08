"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from voice_social.db.session import get_db
from voice_social.services.audio_storage import AudioStorage
from voice_social.services.welcome import WelcomeNotifier

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_audio_storage(request: Request) -> AudioStorage:
    """Return the audio backend built at startup."""
    return request.app.state.audio_storage


def get_welcome_notifier(request: Request) -> WelcomeNotifier:
    """Return the welcome notifier built at startup."""
    return request.app.state.welcome_notifier


def get_client_address(request: Request) -> str:
    """Best guess at the caller's address behind a reverse proxy.

    Uses the first ``X-Forwarded-For`` hop, then ``X-Real-IP``, then the
    socket peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",", 1)[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


AudioStorageDep = Annotated[AudioStorage, Depends(get_audio_storage)]
WelcomeNotifierDep = Annotated[WelcomeNotifier, Depends(get_welcome_notifier)]
ClientAddressDep = Annotated[str, Depends(get_client_address)]
