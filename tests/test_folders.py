from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from learn_note.database import commit_or_raise
from learn_note.models import Folder, Topic
from learn_note.utils.errors import Conflict, ReferenceInvalid

FOLDER_KEYS = {"id", "title", "createdAt", "updatedAt"}


def _create(client: TestClient, headers: dict, title="Java") -> dict:
    r = client.post("/api/folders", json={"title": title}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_folder(client: TestClient, ann: dict) -> None:
    r = client.post("/api/folders", json={"title": "Java"}, headers=ann)

    assert r.status_code == 201
    body = r.json()
    assert set(body) == FOLDER_KEYS
    assert body["title"] == "Java"


def test_duplicate_title_for_same_user(client: TestClient, ann: dict) -> None:
    _create(client, ann)

    r = client.post("/api/folders", json={"title": "Java"}, headers=ann)

    assert r.status_code == 400
    assert r.json()["message"] == "Folder with this title already exists"


def test_same_title_for_different_users(client: TestClient, ann: dict, bob: dict) -> None:
    _create(client, ann)
    _create(client, bob)


@pytest.mark.parametrize(
    "payload, message",
    [
        ({}, "Missing title in request body."),
        ({"title": "   "}, "Folder title is required"),
        ({"title": None}, "Folder title must be a string"),
        ({"title": ["Java"]}, "Folder title must be a string"),
    ],
)
def test_invalid_titles(client: TestClient, ann: dict, payload: dict, message: str) -> None:
    r = client.post("/api/folders", json=payload, headers=ann)

    assert r.status_code == 400
    assert r.json()["message"] == message


def test_numeric_title_is_coerced(client: TestClient, ann: dict) -> None:
    assert _create(client, ann, title=2024)["title"] == "2024"


def test_requires_auth(client: TestClient) -> None:
    assert client.get("/api/folders").status_code == 401
    assert client.post("/api/folders", json={"title": "Java"}).status_code == 401


def test_list_only_returns_own_folders(client: TestClient, ann: dict, bob: dict) -> None:
    _create(client, ann, "Java")
    _create(client, ann, "Python")
    _create(client, bob, "Rust")

    r = client.get("/api/folders", headers=ann)

    assert r.status_code == 200
    assert [f["title"] for f in r.json()] == ["Java", "Python"]
    for folder in r.json():
        assert set(folder) == FOLDER_KEYS


def test_list_ordering_and_limit(client: TestClient, ann: dict) -> None:
    for title in ("B", "C", "A"):
        _create(client, ann, title)

    r = client.get("/api/folders", params={"orderBy": "title", "orderDirection": "desc"}, headers=ann)
    assert [f["title"] for f in r.json()] == ["C", "B", "A"]

    r = client.get("/api/folders", params={"orderBy": "title", "limit": 2}, headers=ann)
    assert [f["title"] for f in r.json()] == ["A", "B"]


def test_list_rejects_unknown_order_column(client: TestClient, ann: dict) -> None:
    r = client.get("/api/folders", params={"orderBy": "userId"}, headers=ann)

    assert r.status_code == 400


def test_list_rejects_bad_limit(client: TestClient, ann: dict) -> None:
    assert client.get("/api/folders", params={"limit": 0}, headers=ann).status_code == 400
    assert client.get("/api/folders", params={"limit": "many"}, headers=ann).status_code == 400


def test_rename_folder(client: TestClient, ann: dict) -> None:
    folder = _create(client, ann)

    r = client.put(f"/api/folders/{folder['id']}", json={"title": "Kotlin"}, headers=ann)

    assert r.status_code == 201
    assert r.json()["id"] == folder["id"]
    assert r.json()["title"] == "Kotlin"


def test_rename_to_own_title_is_allowed(client: TestClient, ann: dict) -> None:
    folder = _create(client, ann)

    r = client.put(f"/api/folders/{folder['id']}", json={"title": "Java"}, headers=ann)

    assert r.status_code == 201


def test_rename_to_sibling_title_is_rejected(client: TestClient, ann: dict) -> None:
    _create(client, ann, "Java")
    folder = _create(client, ann, "Python")

    r = client.put(f"/api/folders/{folder['id']}", json={"title": "Java"}, headers=ann)

    assert r.status_code == 400
    assert r.json()["message"] == "Folder with this title already exists"


def test_other_users_folder_looks_missing(client: TestClient, ann: dict, bob: dict) -> None:
    folder = _create(client, ann)
    url = f"/api/folders/{folder['id']}"

    assert client.get(url, headers=bob).status_code == 404
    assert client.put(url, json={"title": "Mine"}, headers=bob).status_code == 404
    assert client.delete(url, headers=bob).status_code == 404

    r = client.get(url, headers=ann)
    assert r.status_code == 200
    assert r.json()["title"] == "Java"


def test_update_missing_folder(client: TestClient, ann: dict) -> None:
    r = client.put("/api/folders/999999", json={"title": "Kotlin"}, headers=ann)

    assert r.status_code == 404
    assert r.json()["message"] == "Folder not found"


def test_delete_folder(client: TestClient, ann: dict) -> None:
    folder = _create(client, ann)

    r = client.delete(f"/api/folders/{folder['id']}", headers=ann)
    assert r.status_code == 204

    assert client.delete(f"/api/folders/{folder['id']}", headers=ann).status_code == 404
    assert client.get("/api/folders", headers=ann).json() == []


def test_delete_folder_detaches_topics(client: TestClient, ann: dict) -> None:
    folder = _create(client, ann)
    r = client.post("/api/topics", json={"title": "Generics", "parent": folder["id"]}, headers=ann)
    topic = r.json()
    assert topic["parent"] == {"id": folder["id"], "title": "Java"}

    assert client.delete(f"/api/folders/{folder['id']}", headers=ann).status_code == 204

    r = client.get(f"/api/topics/{topic['id']}", headers=ann)
    assert r.status_code == 200
    assert r.json()["parent"] is None


def test_store_constraints_back_up_the_prechecks(client: TestClient, ann: dict) -> None:
    user_id = client.get("/api/users/me", headers=ann).json()["id"]
    db = client.app.state.sessionlocal()
    try:
        db.add(Folder(user_id=user_id, title="Java"))
        commit_or_raise(db)

        db.add(Folder(user_id=user_id, title="Java"))
        with pytest.raises(Conflict):
            commit_or_raise(db, "Folder with this title already exists")

        db.add(Topic(user_id=user_id, title="Orphan", parent=999999))
        with pytest.raises(ReferenceInvalid):
            commit_or_raise(db)
    finally:
        db.close()
