"""End-to-end interaction scenarios through the HTTP API."""

from fastapi import status

AUDIO = b"ID3" + b"\x00" * 3000


def _points(client, fid):
    return client.get(f"/api/v1/users/{fid}").json()["stats"]


def test_upload_like_comment_view_round(client) -> None:
    upload = client.post(
        "/api/v1/voices/upload",
        data={"userFid": "1", "duration": "12.5", "username": "alice"},
        files={"audio": ("a.mp3", AUDIO, "audio/mpeg")},
    )
    assert upload.status_code == status.HTTP_201_CREATED
    voice_id = upload.json()["id"]
    assert upload.json()["duration"] == 12.5
    client.post("/api/v1/users/save", json={"fid": 2, "username": "bob"})

    liked = client.post(f"/api/v1/voices/{voice_id}/like", json={"userFid": 2})
    assert liked.json() == {"liked": True, "likeCount": 1}
    assert _points(client, 1)["totalPoints"] == 5
    [notification] = client.get("/api/v1/notifications", params={"userFid": 1}).json()[
        "notifications"
    ]
    assert notification["type"] == "like"
    assert notification["senderFid"] == "2"
    assert notification["read"] is False

    unliked = client.post(f"/api/v1/voices/{voice_id}/like", json={"userFid": 2})
    assert unliked.json() == {"liked": False, "likeCount": 0}
    assert _points(client, 1)["totalPoints"] == 0

    for _ in range(3):
        client.post(f"/api/v1/voices/{voice_id}/view", headers={"x-real-ip": "198.51.100.7"})
    assert client.get(f"/api/v1/voices/{voice_id}").json()["viewCount"] == 3
    assert _points(client, 1)["totalPoints"] == 0

    comment = client.post(
        f"/api/v1/voices/{voice_id}/comments",
        json={"userFid": 2, "type": "TEXT", "content": "nice!"},
    )
    assert comment.json()["type"] == "text"
    stats = _points(client, 1)
    assert stats["totalPoints"] == 10
    assert stats["totalPoints"] == stats["viewPoints"] + stats["likePoints"] + stats["commentPoints"]
    comments = client.get(f"/api/v1/voices/{voice_id}/comments").json()
    assert comments[-1]["content"] == "nice!"
