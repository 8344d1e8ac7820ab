from tests.helpers import create_topic, login, register


def _topic_likes(client, topic_id: int) -> int:
    return client.get(f"/api/topics/{topic_id}").json()["likesCount"]


def _setup_topic_with_comment(client):
    register(client, "alice", "a@x.com")
    topic = create_topic(client).json()
    comment = client.post(f"/api/topics/{topic['id']}/comments", json={"content": "nice"}).json()
    return topic, comment


def test_like_topic_twice_is_rejected_without_double_counting(client) -> None:
    register(client, "alice", "a@x.com")
    topic = create_topic(client).json()

    first = client.post(f"/api/topics/{topic['id']}/like")
    second = client.post(f"/api/topics/{topic['id']}/like")

    assert first.status_code == 201
    assert first.json()["likesCount"] == 1
    assert first.json()["topicId"] == topic["id"]
    assert first.json()["commentId"] is None
    assert second.status_code == 400
    assert _topic_likes(client, topic["id"]) == 1


def test_unlike_never_liked_topic_is_a_noop(client) -> None:
    register(client, "alice", "a@x.com")
    topic = create_topic(client).json()

    response = client.delete(f"/api/topics/{topic['id']}/like")

    assert response.status_code == 200
    assert response.json() == {"removed": False, "likesCount": 0}
    assert _topic_likes(client, topic["id"]) == 0


def test_unlike_twice_never_goes_below_zero(client) -> None:
    register(client, "alice", "a@x.com")
    topic = create_topic(client).json()
    client.post(f"/api/topics/{topic['id']}/like")

    assert client.delete(f"/api/topics/{topic['id']}/like").json() == {"removed": True, "likesCount": 0}
    assert client.delete(f"/api/topics/{topic['id']}/like").json() == {"removed": False, "likesCount": 0}


def test_likes_from_different_users_add_up(client) -> None:
    register(client, "alice", "a@x.com")
    topic = create_topic(client).json()
    client.post(f"/api/topics/{topic['id']}/like")
    client.post("/api/logout")
    register(client, "bob", "b@x.com")
    client.post(f"/api/topics/{topic['id']}/like")

    assert _topic_likes(client, topic["id"]) == 2
    likes = client.get(f"/api/topics/{topic['id']}/likes").json()
    assert len(likes) == 2

    login(client, "a@x.com")
    client.delete(f"/api/topics/{topic['id']}/like")
    assert _topic_likes(client, topic["id"]) == 1


def test_like_and_unlike_comment(client) -> None:
    topic, comment = _setup_topic_with_comment(client)

    liked = client.post(f"/api/comments/{comment['id']}/like")
    duplicate = client.post(f"/api/comments/{comment['id']}/like")

    assert liked.status_code == 201
    assert liked.json()["likesCount"] == 1
    assert liked.json()["commentId"] == comment["id"]
    assert duplicate.status_code == 400

    detail = client.get(f"/api/topics/{topic['id']}").json()
    assert detail["comments"][0]["likesCount"] == 1
    assert detail["likesCount"] == 0

    unliked = client.delete(f"/api/comments/{comment['id']}/like")
    assert unliked.json() == {"removed": True, "likesCount": 0}


def test_topic_and_comment_likes_are_independent(client) -> None:
    topic, comment = _setup_topic_with_comment(client)

    assert client.post(f"/api/topics/{topic['id']}/like").status_code == 201
    assert client.post(f"/api/comments/{comment['id']}/like").status_code == 201

    mine = client.get("/api/users/me/likes").json()
    assert {(like["topicId"], like["commentId"]) for like in mine} == {
        (topic["id"], None),
        (None, comment["id"]),
    }
    assert len(client.get(f"/api/comments/{comment['id']}/likes").json()) == 1


def test_like_missing_targets_is_404(client) -> None:
    register(client, "alice", "a@x.com")

    assert client.post("/api/topics/999/like").status_code == 404
    assert client.delete("/api/topics/999/like").status_code == 404
    assert client.post("/api/comments/999/like").status_code == 404
    assert client.delete("/api/comments/999/like").status_code == 404


def test_like_routes_with_non_numeric_ids_are_404(client) -> None:
    register(client, "alice", "a@x.com")

    assert client.post("/api/topics/abc/like").status_code == 404
    assert client.delete("/api/comments/abc/like").status_code == 404
    assert client.get("/api/topics/abc/likes").status_code == 404
    assert client.get("/api/comments/abc/likes").status_code == 404


def test_like_requires_login(client) -> None:
    register(client, "alice", "a@x.com")
    topic = create_topic(client).json()
    client.post("/api/logout")

    assert client.post(f"/api/topics/{topic['id']}/like").status_code == 401
