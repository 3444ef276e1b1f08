# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from datetime import datetime
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("WELCOME_NOTIFICATIONS_ENABLED", "false")

from voice_social.api.v1.dependencies import get_audio_storage, get_welcome_notifier
from voice_social.db.session import Database
from voice_social.db.session import get_db as app_get_session
from voice_social.main import app as fastapi_app
from voice_social.models import User, Voice
from voice_social.models.voice import new_voice_id
from voice_social.schemas.user import ProfileFields
from voice_social.services.audio_storage import InlineBlobStorage
from voice_social.services.identity import ensure_user
from voice_social.services.welcome import WelcomeNotifier

TEST_DB_URL = "sqlite://"
SAMPLE_AUDIO = b"RIFF" + b"\x00" * 2044

_FID_COUNTER = count(1000)


@pytest.fixture(scope="session")
def database() -> Iterator[Database]:
    database = Database(TEST_DB_URL, poolclass=StaticPool)
    database.create_tables()
    try:
        yield database
    finally:
        database.drop_tables()
        database.dispose()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    connection = database.engine.connect()
    transaction = connection.begin()
    # Commits inside the code under test only release SAVEPOINTs; the outer
    # transaction is rolled back after every test.
    session = Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def audio_storage() -> InlineBlobStorage:
    return InlineBlobStorage()


@pytest.fixture()
def welcome_notifier() -> WelcomeNotifier:
    """A notifier with no relay configured, so nothing is sent."""
    return WelcomeNotifier(None)


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    audio_storage: InlineBlobStorage,
    welcome_notifier: WelcomeNotifier,
) -> Iterator[None]:
    def _get_session_override() -> Iterator[Session]:
        try:
            yield db_session
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_audio_storage] = lambda: audio_storage
    app.dependency_overrides[get_welcome_notifier] = lambda: welcome_notifier
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_audio_storage, None)
        app.dependency_overrides.pop(get_welcome_notifier, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Create a user (and points row) with a fresh fid unless one is given."""

    def _make(fid: int | None = None, **fields: Any) -> User:
        user = ensure_user(db_session, fid or next(_FID_COUNTER), ProfileFields(**fields))
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def make_voice(db_session: Session) -> Callable[..., Voice]:
    """Insert a voice with inline audio owned by ``owner``."""

    def _make(
        owner: User,
        *,
        created_at: datetime | None = None,
        data: bytes = SAMPLE_AUDIO,
        mime_type: str = "audio/webm",
        **fields: Any,
    ) -> Voice:
        voice = Voice(
            id=new_voice_id(),
            user_fid=owner.fid,
            audio_data=data,
            audio_mime_type=mime_type,
            duration=fields.pop("duration", 12.5),
            title=fields.pop("title", f"Voice by {owner.username}"),
            description=fields.pop("description", ""),
            is_anonymous=fields.pop("is_anonymous", False),
        )
        if created_at is not None:
            voice.created_at = created_at
        db_session.add(voice)
        db_session.commit()
        return voice

    return _make


@pytest.fixture()
def owner(make_user: Callable[..., User]) -> User:
    return make_user(username="owner", display_name="Voice Owner")


@pytest.fixture()
def listener(make_user: Callable[..., User]) -> User:
    return make_user(username="listener", display_name="Listener")


@pytest.fixture()
def voice(make_voice: Callable[..., Voice], owner: User) -> Voice:
    return make_voice(owner)
