"""Tests for 24h voice rotation and history pruning."""

from datetime import UTC, datetime, timedelta

from voice_social.db.time import window_start
from voice_social.models import VoiceHistory
from voice_social.services.rotation import prune_history, select_voices

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _voices(make_voice, owner, count):
    return [
        make_voice(owner, created_at=NOW - timedelta(hours=1, minutes=i)) for i in range(count)
    ]


def test_consecutive_selections_are_disjoint(db_session, make_voice, owner, listener) -> None:
    _voices(make_voice, owner, 6)

    first = select_voices(db_session, 3, listener.fid, now=NOW)
    second = select_voices(db_session, 3, listener.fid, now=NOW + timedelta(minutes=1))

    assert len(first) == 3
    assert len(second) == 3
    assert not {v.id for v in first} & {v.id for v in second}


def test_pool_exhaustion_returns_fewer(db_session, make_voice, owner, listener) -> None:
    _voices(make_voice, owner, 2)

    assert len(select_voices(db_session, 5, listener.fid, now=NOW)) == 2
    assert select_voices(db_session, 5, listener.fid, now=NOW) == []


def test_voices_return_after_window(db_session, make_voice, owner, listener) -> None:
    created = _voices(make_voice, owner, 2)
    select_voices(db_session, 2, listener.fid, now=NOW)

    later = select_voices(db_session, 2, listener.fid, now=NOW + timedelta(hours=25))

    assert {v.id for v in later} == {v.id for v in created}


def test_history_is_per_user(db_session, make_voice, owner, listener) -> None:
    _voices(make_voice, owner, 2)
    select_voices(db_session, 2, listener.fid, now=NOW)

    assert len(select_voices(db_session, 2, owner.fid, now=NOW)) == 2


def test_anonymous_selection_is_paged_and_not_recorded(db_session, make_voice, owner) -> None:
    created = _voices(make_voice, owner, 3)

    page = select_voices(db_session, 2, offset=2)

    assert [v.id for v in page] == [created[2].id]
    assert db_session.query(VoiceHistory).count() == 0


def test_history_failure_still_returns_voices(db_session, make_voice, owner) -> None:
    _voices(make_voice, owner, 2)

    # No such user: the history insert violates its foreign key.
    voices = select_voices(db_session, 2, 31337, now=NOW)

    assert len(voices) == 2
    assert db_session.query(VoiceHistory).count() == 0


def test_prune_removes_only_expired_rows(db_session, make_voice, owner, listener) -> None:
    _voices(make_voice, owner, 3)
    select_voices(db_session, 2, listener.fid, now=NOW - timedelta(hours=30))
    select_voices(db_session, 1, listener.fid, now=NOW)

    removed = prune_history(db_session, older_than=NOW - timedelta(hours=24))

    assert removed == 2
    assert db_session.query(VoiceHistory).count() == 1


def test_window_start_counts_back_from_now() -> None:
    assert window_start(hours=24, now=NOW) == NOW - timedelta(days=1)
    assert window_start(days=7, now=NOW) == datetime(2026, 2, 22, 12, 0, tzinfo=UTC)
