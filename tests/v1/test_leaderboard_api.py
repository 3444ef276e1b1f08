"""Tests for the leaderboard endpoint."""

from fastapi import status


def test_leaderboard_after_interactions(client, make_user, make_voice, owner, listener) -> None:
    voice = make_voice(owner)
    client.post(f"/api/v1/voices/{voice.id}/like", json={"userFid": listener.fid})
    client.post(f"/api/v1/voices/{voice.id}/view", json={"userFid": listener.fid})

    response = client.get("/api/v1/leaderboard")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["timeframe"] == "all"
    top = body["leaderboard"][0]
    assert top["rank"] == 1
    assert top["user"]["fid"] == str(owner.fid)
    assert top["totalPoints"] == 6
    assert top["likePoints"] == 5
    assert top["viewPoints"] == 1
    assert top["voicesCount"] == 1


def test_weekly_board(client, make_voice, owner, listener) -> None:
    make_voice(owner)

    body = client.get("/api/v1/leaderboard", params={"timeframe": "weekly"}).json()

    assert body["timeframe"] == "weekly"
    assert [entry["user"]["fid"] for entry in body["leaderboard"]] == [str(owner.fid)]


def test_limit(client, make_user) -> None:
    for _ in range(3):
        make_user()

    body = client.get("/api/v1/leaderboard", params={"limit": 2}).json()

    assert len(body["leaderboard"]) == 2


def test_unknown_timeframe(client) -> None:
    response = client.get("/api/v1/leaderboard", params={"timeframe": "daily"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "ValidationError"
