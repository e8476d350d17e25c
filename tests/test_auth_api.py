# tests/test_auth_api.py

from __future__ import annotations

import time

import jwt
import pytest
from fastapi.testclient import TestClient

from task_api.auth import create_access_token, hash_password, verify_password
from task_api.errors import STATUS_CODES, ErrorKind
from task_api.main import create_app

REGISTER = "/api/v1/auth/register"
LOGIN = "/api/v1/auth/login"
TASKS = "/api/v1/tasks"


def test_register_returns_user_summary(client):
    resp = client.post(
        REGISTER, json={"name": "Alice", "email": "Alice@Example.com", "password": "secret123"}
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Alice"
    assert body["email"] == "alice@example.com"
    assert "password" not in body and "password_hash" not in body


def test_register_duplicate_email_conflicts(client, alice):
    resp = client.post(
        REGISTER, json={"name": "Other", "email": "alice@example.com", "password": "secret456"}
    )
    assert resp.status_code == 409
    assert resp.json()["detail"] == "User already exists"


def test_register_validates_fields(client):
    resp = client.post(REGISTER, json={"name": "", "email": "not-an-email", "password": "123"})
    assert resp.status_code == 422
    fields = {e["field"] for e in resp.json()["errors"]}
    assert fields == {"name", "email", "password"}


def test_login_returns_bearer_token(client, alice):
    resp = client.post(LOGIN, json={"email": "alice@example.com", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "alice@example.com"
    assert body["access_token"]


@pytest.mark.parametrize(
    "email, password",
    [("alice@example.com", "wrong-password"), ("nobody@example.com", "secret123")],
)
def test_login_rejects_bad_credentials(client, alice, email, password):
    resp = client.post(LOGIN, json={"email": email, "password": password})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


def test_task_routes_require_token(client):
    for method, path in [
        ("get", TASKS),
        ("post", TASKS),
        ("get", f"{TASKS}/today"),
        ("get", f"{TASKS}/today/count"),
        ("patch", f"{TASKS}/abc"),
    ]:
        resp = getattr(client, method)(path)
        assert resp.status_code == 401, path
        assert resp.json()["detail"] == "Access token required"
        assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_invalid_token_is_rejected(client):
    resp = client.get(TASKS, headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"


def test_expired_token_is_rejected(client, settings, alice):
    user_id = client.post(
        LOGIN, json={"email": "alice@example.com", "password": "secret123"}
    ).json()["user"]["id"]
    stale = create_access_token(user_id, settings, now=int(time.time()) - 10 * 365 * 86400)

    resp = client.get(TASKS, headers={"Authorization": f"Bearer {stale}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token expired"


def test_token_for_unknown_user_is_rejected(client, settings):
    token = create_access_token("01ARZ3NDEKTSV4RRFFQ69G5FAV", settings)
    resp = client.get(TASKS, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_signed_with_other_secret_is_rejected(client, alice):
    forged = jwt.encode(
        {"sub": "someone", "exp": int(time.time()) + 60},
        "a-different-secret-that-is-long-enough",
        algorithm="HS256",
    )
    resp = client.get(TASKS, headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401


def test_password_hashing():
    hashed = hash_password("secret123", iterations=1_000)
    assert hashed.startswith("pbkdf2_sha256$1000$")
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)
    assert not verify_password("secret123", "garbage")
    assert hash_password("secret123") != hash_password("secret123")


def test_unexpected_errors_return_generic_500(settings):
    app = create_app(settings)

    @app.get("/boom")
    def boom():
        raise RuntimeError("database password is hunter2")

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error", "errors": None}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_validation_errors_map_to_422():
    assert STATUS_CODES[ErrorKind.UNPROCESSABLE_ENTITY] == 422


@pytest.mark.parametrize("method, allowed", [("PATCH", True), ("DELETE", False), ("PUT", False)])
def test_cors_preflight_allows_only_routed_methods(client, method, allowed):
    resp = client.options(
        TASKS,
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": method,
        },
    )
    assert (resp.status_code == 200) is allowed
