"""Registration, login and token handling."""

import time

import jwt

from src.core.config import settings
from conftest import PASSWORD


def test_register_returns_user_and_token(client):
    resp = client.post("/auth/register", json={"username": "alice", "password": PASSWORD})

    assert resp.status_code == 201
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["username"] == "alice"
    assert "password_hash" not in body["user"]


def test_register_duplicate_username_conflicts(client, register):
    register("alice")

    resp = client.post("/auth/register", json={"username": "ALICE", "password": PASSWORD})

    assert resp.status_code == 409
    assert resp.json()["error_code"] == "CONFLICT"


def test_register_validates_credentials(client):
    assert client.post("/auth/register", json={"username": "al", "password": PASSWORD}).status_code == 422
    assert client.post("/auth/register", json={"username": "alice", "password": "short"}).status_code == 422
    assert client.post("/auth/register", json={"username": "a b c", "password": PASSWORD}).status_code == 422


def test_login(client, register):
    user, _ = register("alice")

    resp = client.post("/auth/login", json={"username": "alice", "password": PASSWORD})

    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == user["id"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {resp.json()['access_token']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "alice"


def test_login_with_wrong_password(client, register):
    register("alice")

    resp = client.post("/auth/login", json={"username": "alice", "password": "wrong-password"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid username or password"


def test_login_unknown_user(client):
    resp = client.post("/auth/login", json={"username": "nobody", "password": PASSWORD})

    assert resp.status_code == 401


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401


def test_expired_token_is_rejected(client, register):
    user, _ = register("alice")
    now = int(time.time())
    token = jwt.encode(
        {"sub": str(user["id"]), "type": "access", "iat": now - 120, "exp": now - 60},
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    resp = client.post("/posts", json={"content": "late"}, headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "Access token has expired."


def test_token_for_unknown_principal_is_rejected(client):
    now = int(time.time())
    token = jwt.encode(
        {"sub": "999", "type": "access", "iat": now, "exp": now + 60},
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    resp = client.post("/posts", json={"content": "ghost"}, headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "User not found"


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
