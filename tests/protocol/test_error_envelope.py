from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from loa.protocol.http.app import create_app


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app()

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=409, detail="busy")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 409
    err = r.json()["error"]
    assert err["code"] == "conflict"
    assert err["message"] == "busy"
    assert err["type"] == "client_error"
    assert err["request_id"] == r.headers["x-request-id"]


def test_validation_errors_use_envelope() -> None:
    client = TestClient(create_app())
    game_id = client.post("/api/games").json()["game_id"]

    r = client.post(f"/api/games/{game_id}/search", json={"depth": 0})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert err["field_errors"]
    assert any(fe["field"].endswith("depth") for fe in err["field_errors"])

    r2 = client.post(f"/api/games/{game_id}/move", json={})
    assert r2.status_code == 422
