"""Welcome push sent to Farcaster users the first time they are seen."""

from __future__ import annotations

import logging

import httpx

from voice_social.core.settings import Settings

logger = logging.getLogger(__name__)

WELCOME_TITLE = "🎤 Welcome to Voice Social!"


class WelcomeNotifier:
    """Posts a welcome notification to the configured Farcaster relay.

    Delivery is best-effort: failures are logged and reported as ``False``,
    never raised.
    """

    def __init__(
        self,
        url: str | None,
        *,
        enabled: bool = True,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.enabled = enabled and bool(url)
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls, config: Settings) -> WelcomeNotifier:
        return cls(
            config.farcaster_notification_url,
            enabled=config.welcome_notifications_enabled,
            timeout_seconds=config.farcaster_notification_timeout_seconds,
        )

    async def notify(self, fid: int, username: str) -> bool:
        """Send the welcome message to ``fid``; return whether it was accepted."""
        if not self.enabled:
            return False
        payload = {
            "fid": fid,
            "title": WELCOME_TITLE,
            "message": f"Welcome {username}! Start sharing your voice and connect with others! 🎵",
            "notificationType": "welcome",
        }
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Welcome notification for %s failed: %s", fid, exc)
            return False
        logger.info("Welcome notification sent to %s", fid)
        return True
