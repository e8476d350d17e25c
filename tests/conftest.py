# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_api.config import Settings
from task_api.db import Database, TaskStore, UserStore
from task_api.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test database; env and .env are not consulted."""
    return Settings(
        _env_file=None,
        database_path=tmp_path / "tasks.db",
        jwt_secret="test-secret-that-is-long-enough-for-hs256",
        log_level="WARNING",
    )


@pytest.fixture()
def database(tmp_path: Path) -> Iterator[Database]:
    db = Database(tmp_path / "store.db")
    db.open()
    yield db
    db.close()


@pytest.fixture()
def task_store(database: Database) -> TaskStore:
    return TaskStore(database)


@pytest.fixture()
def user_store(database: Database) -> UserStore:
    return UserStore(database)


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    """TestClient with the app lifespan running (database opened and closed)."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def register_and_login(client: TestClient) -> Callable[..., dict[str, str]]:
    """Register a user and return Authorization headers for them."""

    def _register(email: str = "alice@example.com", password: str = "secret123") -> dict[str, str]:
        resp = client.post(
            "/api/v1/auth/register",
            json={"name": email.split("@")[0], "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        resp = client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _register


@pytest.fixture()
def alice(register_and_login) -> dict[str, str]:
    return register_and_login("alice@example.com")


@pytest.fixture()
def bob(register_and_login) -> dict[str, str]:
    return register_and_login("bob@example.com")
