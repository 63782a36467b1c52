# -*- coding: utf-8 -*-
"""Location: ./tests/unit/execgateway/routers/test_user_router.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for the user persistence endpoints.
"""

# Third-Party
from fastapi.testclient import TestClient

USER = {"username": "ada", "email": "ada@example.com", "full_name": "Ada Lovelace"}


def test_create_and_get_user(client):
    response = client.post("/api/v1/user/", json=USER)
    assert response.status_code == 201
    created = response.json()
    assert created["username"] == "ada"
    assert created["id"]

    fetched = client.get(f"/api/v1/user/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["email"] == "ada@example.com"


def test_list_users(client):
    client.post("/api/v1/user/", json=USER)
    client.post("/api/v1/user/", json={"username": "grace", "email": "grace@example.com"})

    response = client.get("/api/v1/user/")
    assert response.status_code == 200
    assert sorted(u["username"] for u in response.json()) == ["ada", "grace"]


def test_duplicate_user_conflict(client):
    assert client.post("/api/v1/user/", json=USER).status_code == 201
    response = client.post("/api/v1/user/", json={**USER, "email": "other@example.com"})
    assert response.status_code == 409


def test_unknown_user_not_found(client):
    assert client.get("/api/v1/user/does-not-exist").status_code == 404
    assert client.delete("/api/v1/user/does-not-exist").status_code == 404


def test_delete_user_removes_their_files(client):
    user_id = client.post("/api/v1/user/", json=USER).json()["id"]
    file_id = client.post("/api/v1/file/", json={"name": "a.py", "language": "python", "owner_id": user_id}).json()["id"]

    assert client.delete(f"/api/v1/user/{user_id}").status_code == 204
    assert client.get(f"/api/v1/user/{user_id}").status_code == 404
    assert client.get(f"/api/v1/file/{file_id}").status_code == 404


def test_validation_error(client):
    response = client.post("/api/v1/user/", json={"username": ""})
    assert response.status_code == 422


def test_unreachable_store_generic_failure(make_app, unreachable_db_url):
    with TestClient(make_app(database_url=unreachable_db_url, environment="production")) as client:
        response = client.get("/api/v1/user/")
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Something went wrong!"}

        # still serving
        assert client.get("/health").status_code == 200


def test_unreachable_store_detail_in_diagnostic_mode(make_app, unreachable_db_url):
    with TestClient(make_app(database_url=unreachable_db_url)) as client:
        response = client.get("/api/v1/user/")
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "Backing store connection failed" in body["message"]
