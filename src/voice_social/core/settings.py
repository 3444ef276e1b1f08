"""Application settings and configuration.

This module defines all configuration options for the Voice Social service.
Settings are loaded from environment variables with sensible defaults.
"""

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class PointValues:
    """Points credited to a voice owner for each interaction kind."""

    view: int = 1
    like: int = 5
    comment: int = 10


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Voice Social", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_prefix: str = Field(default="/api/v1", alias="API_PREFIX")

    # Database configuration
    database_url: str = Field(default="sqlite:///./voice_social.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Point system
    points_view: int = Field(default=1, ge=0, alias="POINTS_VIEW")
    points_like: int = Field(default=5, ge=0, alias="POINTS_LIKE")
    points_comment: int = Field(default=10, ge=0, alias="POINTS_COMMENT")

    # Voice rotation: a voice served to a user is hidden from them for this long
    rotation_window_hours: int = Field(default=24, ge=1, alias="ROTATION_WINDOW_HOURS")
    history_retention_hours: int = Field(default=24, ge=1, alias="HISTORY_RETENTION_HOURS")

    # Notifications and leaderboard
    notification_fetch_limit: int = Field(default=50, ge=1, alias="NOTIFICATION_FETCH_LIMIT")
    leaderboard_default_limit: int = Field(default=50, ge=1, alias="LEADERBOARD_DEFAULT_LIMIT")
    leaderboard_max_limit: int = Field(default=100, ge=1, alias="LEADERBOARD_MAX_LIMIT")
    leaderboard_weekly_days: int = Field(default=7, ge=1, alias="LEADERBOARD_WEEKLY_DAYS")
    leaderboard_monthly_days: int = Field(default=30, ge=1, alias="LEADERBOARD_MONTHLY_DAYS")

    # Audio storage: "blob" keeps bytes in the voice row, "file" writes to disk
    audio_storage_backend: str = Field(default="blob", alias="AUDIO_STORAGE_BACKEND")
    audio_upload_dir: Path = Field(default=Path("uploads/voices"), alias="AUDIO_UPLOAD_DIR")
    audio_public_prefix: str = Field(default="/uploads/voices", alias="AUDIO_PUBLIC_PREFIX")
    min_audio_bytes: int = Field(default=1024, ge=0, alias="MIN_AUDIO_BYTES")
    max_audio_bytes: int = Field(default=10 * 1024 * 1024, ge=1, alias="MAX_AUDIO_BYTES")
    max_recording_duration_seconds: float = Field(
        default=60.0,
        gt=0,
        alias="MAX_RECORDING_DURATION_SECONDS",
    )
    audio_cache_max_age: int = Field(default=31_536_000, ge=0, alias="AUDIO_CACHE_MAX_AGE")

    # Farcaster welcome push
    welcome_notifications_enabled: bool = Field(
        default=False,
        alias="WELCOME_NOTIFICATIONS_ENABLED",
    )
    farcaster_notification_url: str | None = Field(
        default=None,
        alias="FARCASTER_NOTIFICATION_URL",
    )
    farcaster_notification_timeout_seconds: float = Field(
        default=5.0,
        alias="FARCASTER_NOTIFICATION_TIMEOUT_SECONDS",
    )

    # CORS configuration for the mini-app frontend
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def points(self) -> PointValues:
        """Return the configured point values as one immutable structure."""
        return PointValues(
            view=self.points_view,
            like=self.points_like,
            comment=self.points_comment,
        )


settings = Settings()
