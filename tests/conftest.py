from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from learn_note.config import Settings
from learn_note.main import create_app


def _mk_settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'learn_note.db'}",
        JWT_SECRET="test-secret",
        LOG_FILE="",
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return _mk_settings(tmp_path)


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def signup(client: TestClient) -> Callable[..., dict]:
    """Register a user, log in, and return the auth headers for them."""

    def _signup(email: str = "ann@learnnote.io", name: str = "Ann", password: str = "password1") -> dict:
        r = client.post("/api/users", json={"email": email, "password": password, "name": name})
        assert r.status_code == 201, r.text
        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['authToken']}"}

    return _signup


@pytest.fixture
def ann(signup) -> dict:
    return signup()


@pytest.fixture
def bob(signup) -> dict:
    return signup(email="bob@learnnote.io", name="Bob")
