"""Tests for voice creation, summaries and deletion."""

import pytest
from sqlalchemy.exc import IntegrityError

from voice_social.core.errors import NotFoundError, ValidationError
from voice_social.core.settings import Settings
from voice_social.models import (
    Notification,
    User,
    Voice,
    VoiceComment,
    VoiceHistory,
    VoiceLike,
    VoiceView,
)
from voice_social.schemas.user import ProfileFields
from voice_social.services import ledger
from voice_social.services import voices as voices_service
from voice_social.services.audio_storage import FileAudioStorage, InlineBlobStorage
from voice_social.services.rotation import select_voices
from voice_social.services.voices import create_voice, get_voice, summarize_voices, validate_upload

AUDIO = b"\x1aE\xdf\xa3" + b"\x00" * 4096


def test_create_voice_registers_owner(db_session) -> None:
    voice = create_voice(
        db_session,
        InlineBlobStorage(),
        user_fid=555,
        data=AUDIO,
        mime_type="audio/webm",
        duration=8.0,
        profile=ProfileFields(username="caster", display_name="Caster"),
    )

    assert voice.title == "Voice by Caster"
    assert voice.audio_data == AUDIO
    assert voice.audio_mime_type == "audio/webm"
    assert db_session.get(User, 555).username == "caster"


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"user_fid": None}, "Missing required fields"),
        ({"duration": None}, "Missing required fields"),
        ({"duration": 0}, "positive"),
        ({"duration": 61}, "too long"),
        ({"mime_type": "video/mp4"}, "Invalid file type"),
        ({"size": 10}, "File too small, minimum 1024 bytes required"),
        ({"size": 11 * 1024 * 1024}, "too large"),
    ],
)
def test_upload_validation(kwargs, message) -> None:
    upload = {"user_fid": 1, "size": 4096, "mime_type": "audio/webm", "duration": 5.0}
    upload.update(kwargs)

    with pytest.raises(ValidationError, match=message):
        validate_upload(**upload, config=Settings())


def test_summaries_count_interactions(db_session, owner, listener, voice) -> None:
    ledger.toggle_like(db_session, listener.fid, voice.id)
    ledger.add_comment(db_session, voice.id, listener.fid, "TEXT", content="great")
    ledger.record_view(db_session, voice.id, client_address="1.2.3.4")
    ledger.record_view(db_session, voice.id, user_fid=listener.fid)

    [summary] = summarize_voices(db_session, [voice])

    assert summary.like_count == 1
    assert [like.user_fid for like in summary.likes] == [listener.fid]
    assert summary.comment_count == 1
    assert summary.view_count == 2
    assert summary.user.username == "owner"
    assert summary.playback_url == f"/api/v1/voices/{voice.id}/audio"


def test_get_voice_missing(db_session) -> None:
    with pytest.raises(NotFoundError, match="Voice not found"):
        get_voice(db_session, "nope")


def test_deleting_voice_removes_dependents(db_session, owner, listener, voice) -> None:
    ledger.toggle_like(db_session, listener.fid, voice.id)
    ledger.add_comment(db_session, voice.id, listener.fid, "TEXT", content="bye")
    ledger.record_view(db_session, voice.id, user_fid=listener.fid)
    select_voices(db_session, 1, listener.fid)
    voice_id = voice.id

    db_session.delete(voice)
    db_session.flush()

    assert db_session.get(Voice, voice_id) is None
    for model in (VoiceLike, VoiceComment, VoiceView, VoiceHistory):
        assert db_session.query(model).filter_by(voice_id=voice_id).count() == 0
    assert db_session.query(Notification).filter_by(voice_id=voice_id).count() == 0


def test_failed_insert_removes_stored_file(db_session, monkeypatch, tmp_path, owner, voice) -> None:
    storage = FileAudioStorage(tmp_path / "voices")
    # Another request already holds this id; only the database knows about it.
    db_session.expunge(voice)
    monkeypatch.setattr(voices_service, "new_voice_id", lambda: voice.id)

    with pytest.raises(IntegrityError):
        create_voice(
            db_session,
            storage,
            user_fid=owner.fid,
            data=AUDIO,
            mime_type="audio/webm",
            duration=4.0,
        )

    assert list((tmp_path / "voices").iterdir()) == []
