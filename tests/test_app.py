from __future__ import annotations

from fastapi.testclient import TestClient

from learn_note.config import Settings
from learn_note.main import create_app


def test_health(client: TestClient) -> None:
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_unknown_route_uses_error_shape(client: TestClient) -> None:
    r = client.get("/api/nowhere")

    assert r.status_code == 404
    assert r.json() == {"message": "Not Found", "status": 404}


def test_non_integer_id_is_a_bad_request(client: TestClient, ann: dict) -> None:
    r = client.get("/api/folders/abc", headers=ann)

    assert r.status_code == 400


def test_malformed_json_body(client: TestClient, ann: dict) -> None:
    r = client.post(
        "/api/folders",
        content=b"{not json",
        headers={**ann, "Content-Type": "application/json"},
    )

    assert r.status_code == 400


def test_internal_errors_do_not_leak(settings: Settings) -> None:
    app = create_app(settings)

    @app.get("/boom")
    def boom():
        raise RuntimeError("database password is hunter2")

    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.get("/boom")

    assert r.status_code == 500
    assert r.json() == {"message": "Internal Server Error", "status": 500}
