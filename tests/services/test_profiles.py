"""Tests for profile aggregation."""

import pytest

from voice_social.core.errors import NotFoundError
from voice_social.services import ledger
from voice_social.services.profiles import get_profile


def test_profile_stats(db_session, make_user, make_voice, owner, listener) -> None:
    voice = make_voice(owner)
    make_voice(owner)
    rival = make_user()
    ledger.add_comment(db_session, voice.id, rival.fid, "TEXT", content="hey")
    ledger.toggle_like(db_session, listener.fid, voice.id)
    ledger.record_view(db_session, voice.id, user_fid=listener.fid)

    profile = get_profile(db_session, owner.fid)

    assert profile.username == "owner"
    assert profile.stats.total_voices == 2
    assert profile.stats.total_likes == 1
    assert profile.stats.total_comments == 1
    assert profile.stats.total_views == 1
    assert profile.stats.total_points == 16
    assert profile.stats.rank == 1
    assert len(profile.voices) == 2


def test_profile_for_unknown_user(db_session) -> None:
    with pytest.raises(NotFoundError, match="User not found"):
        get_profile(db_session, 123456789)
