import logging
import os

import pytest

from forum.users import service as user_service
from tests.helpers import login, login_admin, register


def test_list_users_requires_staff(client) -> None:
    assert client.get("/api/users").status_code == 401

    register(client, "alice", "a@x.com")
    assert client.get("/api/users").status_code == 403

    login_admin(client)
    users = client.get("/api/users").json()
    assert {u["username"] for u in users} == {"admin", "alice"}


def test_moderator_can_list_users_but_not_change_roles(client) -> None:
    alice = register(client, "alice", "a@x.com").json()
    login_admin(client)
    client.patch(f"/api/users/{alice['id']}/role", json={"role": "moderator"})
    login(client, "a@x.com")

    assert client.get("/api/users").status_code == 200
    assert client.patch(f"/api/users/{alice['id']}/role", json={"role": "admin"}).status_code == 403


@pytest.mark.parametrize(
    "body",
    [b'{"role": "admin"}', b'{"role": "nonsense"}', b"{}", b"{not json", b""],
)
def test_role_update_by_non_admin_is_always_403(client, body) -> None:
    alice = register(client, "alice", "a@x.com").json()

    response = client.patch(
        f"/api/users/{alice['id']}/role",
        content=body,
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 403


def test_role_update_requires_login(client) -> None:
    assert client.patch("/api/users/1/role", json={"role": "admin"}).status_code == 401


def test_admin_changes_role(client) -> None:
    alice = register(client, "alice", "a@x.com").json()
    login_admin(client)

    response = client.patch(f"/api/users/{alice['id']}/role", json={"role": "moderator"})

    assert response.status_code == 200
    assert response.json()["role"] == "moderator"


def test_admin_role_update_rejects_invalid_role(client) -> None:
    alice = register(client, "alice", "a@x.com").json()
    login_admin(client)

    response = client.patch(f"/api/users/{alice['id']}/role", json={"role": "superuser"})

    assert response.status_code == 400


def test_admin_role_update_for_missing_user_is_404(client) -> None:
    login_admin(client)

    assert client.patch("/api/users/999/role", json={"role": "user"}).status_code == 404


def test_update_profile_with_avatar(client, upload_dir) -> None:
    register(client, "alice", "a@x.com")

    response = client.patch(
        "/api/users/profile",
        data={"username": "alice2", "bio": "hello"},
        files={"avatar": ("Me.jpg", b"jpeg", "image/jpeg")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "alice2"
    assert body["bio"] == "hello"
    assert body["avatar"].startswith("/uploads/me-")
    assert os.listdir(upload_dir) == [os.path.basename(body["avatar"])]


def test_update_profile_with_taken_username_removes_new_avatar(client, upload_dir) -> None:
    register(client, "bob", "b@x.com")
    client.post("/api/logout")
    register(client, "alice", "a@x.com")

    response = client.patch(
        "/api/users/profile",
        data={"username": "bob"},
        files={"avatar": ("me.jpg", b"jpeg", "image/jpeg")},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "username already exists"}
    assert os.listdir(upload_dir) == []


def test_update_profile_rejects_non_image_avatar(client, upload_dir) -> None:
    register(client, "alice", "a@x.com")

    response = client.patch(
        "/api/users/profile",
        files={"avatar": ("me.exe", b"MZ", "application/octet-stream")},
    )

    assert response.status_code == 400
    assert os.listdir(upload_dir) == []


def test_update_profile_requires_login(client) -> None:
    assert client.patch("/api/users/profile", data={"bio": "x"}).status_code == 401


def test_admin_role_update_with_malformed_json_is_400(client) -> None:
    alice = register(client, "alice", "a@x.com").json()
    login_admin(client)

    response = client.patch(
        f"/api/users/{alice['id']}/role",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "validation error"


def test_admin_role_update_without_role_is_field_level_400(client) -> None:
    alice = register(client, "alice", "a@x.com").json()
    login_admin(client)

    response = client.patch(f"/api/users/{alice['id']}/role", json={})

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["detail"]["errors"]] == ["role"]


async def _nobody(*args, **kwargs):
    return None


def test_profile_username_taken_between_check_and_write_is_400(client, upload_dir, monkeypatch) -> None:
    register(client, "bob", "b@x.com")
    client.post("/api/logout")
    register(client, "alice", "a@x.com")
    # la comprobación previa no ve a bob: solo el UNIQUE de la BD lo detecta
    monkeypatch.setattr(user_service, "get_by_username", _nobody)

    response = client.patch(
        "/api/users/profile",
        data={"username": "bob"},
        files={"avatar": ("me.jpg", b"jpeg", "image/jpeg")},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "username already exists"}
    assert os.listdir(upload_dir) == []
    assert client.get("/api/user").json()["username"] == "alice"


def test_profile_store_failure_is_logged_and_cleans_avatar(client, upload_dir, monkeypatch, caplog) -> None:
    alice = register(client, "alice", "a@x.com").json()

    async def _boom(*args, **kwargs):
        raise RuntimeError("store down")

    monkeypatch.setattr(user_service, "update_profile", _boom)

    with caplog.at_level(logging.ERROR, logger="uvicorn"):
        response = client.patch(
            "/api/users/profile",
            data={"bio": "hi"},
            files={"avatar": ("me.jpg", b"jpeg", "image/jpeg")},
        )

    assert response.status_code == 500
    assert response.json() == {"detail": "internal error"}
    assert os.listdir(upload_dir) == []
    assert f"no se pudo actualizar el perfil de {alice['id']}" in caplog.text
