"""Tests for the notification endpoints."""

from fastapi import status


def _like(client, voice, fid):
    client.post(f"/api/v1/voices/{voice.id}/like", json={"userFid": fid})


def test_notification_flow(client, owner, listener, voice) -> None:
    _like(client, voice, listener.fid)
    client.post(
        f"/api/v1/voices/{voice.id}/comments",
        json={"userFid": listener.fid, "content": "lovely"},
    )

    listed = client.get("/api/v1/notifications", params={"userFid": owner.fid})

    body = listed.json()
    assert body["unreadCount"] == 2
    assert [n["type"] for n in body["notifications"]] == ["comment", "like"]
    assert body["notifications"][0]["sender"]["username"] == "listener"

    first_id = body["notifications"][0]["id"]
    marked = client.post(
        "/api/v1/notifications",
        json={"userFid": owner.fid, "notificationIds": [first_id]},
    )
    assert marked.json() == {"updated": 1}

    unread = client.get(
        "/api/v1/notifications", params={"userFid": owner.fid, "unreadOnly": "true"}
    ).json()
    assert unread["unreadCount"] == 1
    assert [n["type"] for n in unread["notifications"]] == ["like"]

    all_marked = client.post("/api/v1/notifications", json={"userFid": owner.fid})
    assert all_marked.json() == {"updated": 1}


def test_requires_user(client) -> None:
    response = client.get("/api/v1/notifications")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "ValidationError"


def test_no_notification_for_own_actions(client, owner, voice) -> None:
    _like(client, voice, owner.fid)

    body = client.get("/api/v1/notifications", params={"userFid": owner.fid}).json()

    assert body == {"notifications": [], "unreadCount": 0}
