"""Tests for likes, comments and views and the points they award."""

import pytest

from voice_social.core.errors import NotFoundError, ValidationError
from voice_social.models import CommentKind, Notification, NotificationType, VoiceView
from voice_social.services import ledger
from voice_social.services.scoring import get_points


def _notifications(db_session, fid):
    return db_session.query(Notification).filter_by(recipient_fid=fid).all()


def test_like_then_unlike_restores_points(db_session, owner, listener, voice) -> None:
    liked = ledger.toggle_like(db_session, listener.fid, voice.id)
    assert liked.liked is True
    assert liked.like_count == 1
    assert get_points(db_session, owner.fid).like_points == 5

    unliked = ledger.toggle_like(db_session, listener.fid, voice.id)
    assert unliked.liked is False
    assert unliked.like_count == 0
    points = get_points(db_session, owner.fid)
    assert points.like_points == 0
    assert points.total_points == 0


def test_like_notifies_owner_once(db_session, owner, listener, voice) -> None:
    ledger.toggle_like(db_session, listener.fid, voice.id)

    [notification] = _notifications(db_session, owner.fid)
    assert notification.type is NotificationType.LIKE
    assert notification.sender_fid == listener.fid
    assert notification.voice_id == voice.id
    assert notification.read is False


def test_toggle_alternates(db_session, owner, listener, voice) -> None:
    states = [ledger.toggle_like(db_session, listener.fid, voice.id).liked for _ in range(4)]
    assert states == [True, False, True, False]
    assert ledger.count_likes(db_session, voice.id) == 0


def test_self_like_scores_without_notification(db_session, owner, voice) -> None:
    ledger.toggle_like(db_session, owner.fid, voice.id)

    assert get_points(db_session, owner.fid).like_points == 5
    assert _notifications(db_session, owner.fid) == []


def test_like_unknown_voice(db_session, listener) -> None:
    with pytest.raises(NotFoundError):
        ledger.toggle_like(db_session, listener.fid, "missing")


def test_text_comment_scores_and_notifies(db_session, owner, listener, voice) -> None:
    comment = ledger.add_comment(db_session, voice.id, listener.fid, "TEXT", content="  nice  ")

    assert comment.kind is CommentKind.TEXT
    assert comment.content == "nice"
    assert get_points(db_session, owner.fid).comment_points == 10
    [notification] = _notifications(db_session, owner.fid)
    assert notification.type is NotificationType.COMMENT
    assert notification.comment_id == comment.id


def test_voice_comment_needs_resolvable_audio(db_session, listener, voice) -> None:
    with pytest.raises(ValidationError):
        ledger.add_comment(db_session, voice.id, listener.fid, "VOICE", audio_url="blob:abc")

    comment = ledger.add_comment(
        db_session, voice.id, listener.fid, "voice", audio_url="/api/v1/voices/x/audio"
    )
    assert comment.kind is CommentKind.VOICE
    assert comment.audio_url == "/api/v1/voices/x/audio"


def test_self_comment_does_not_score(db_session, owner, voice) -> None:
    ledger.add_comment(db_session, voice.id, owner.fid, None, content="first!")

    assert get_points(db_session, owner.fid).comment_points == 0
    assert _notifications(db_session, owner.fid) == []


@pytest.mark.parametrize(
    ("kind", "content"),
    [("TEXT", "   "), ("TEXT", None), ("STICKER", "hi")],
)
def test_invalid_comments_are_rejected(db_session, listener, voice, kind, content) -> None:
    with pytest.raises(ValidationError):
        ledger.add_comment(db_session, voice.id, listener.fid, kind, content=content)


def test_comment_requires_user(db_session, voice) -> None:
    with pytest.raises(ValidationError, match="User FID is required"):
        ledger.add_comment(db_session, voice.id, None, "TEXT", content="hi")


def test_comments_are_listed_oldest_first(db_session, owner, listener, voice) -> None:
    first = ledger.add_comment(db_session, voice.id, listener.fid, "TEXT", content="one")
    second = ledger.add_comment(db_session, voice.id, owner.fid, "TEXT", content="two")

    assert [c.id for c in ledger.list_comments(db_session, voice.id)] == [first.id, second.id]


def test_view_scores_once_per_user(db_session, owner, listener, voice) -> None:
    assert ledger.record_view(db_session, voice.id, user_fid=listener.fid) is True
    assert ledger.record_view(db_session, voice.id, user_fid=listener.fid) is False

    assert get_points(db_session, owner.fid).view_points == 1
    assert db_session.query(VoiceView).filter_by(voice_id=voice.id).count() == 1


def test_self_view_is_recorded_without_points(db_session, owner, voice) -> None:
    assert ledger.record_view(db_session, voice.id, user_fid=owner.fid) is True
    assert get_points(db_session, owner.fid).view_points == 0


def test_anonymous_views_always_insert_and_never_score(db_session, owner, voice) -> None:
    for _ in range(2):
        assert ledger.record_view(db_session, voice.id, client_address="10.0.0.1") is True

    views = db_session.query(VoiceView).filter_by(voice_id=voice.id).all()
    assert len(views) == 2
    assert {view.ip_address for view in views} == {"10.0.0.1"}
    assert get_points(db_session, owner.fid).total_points == 0
