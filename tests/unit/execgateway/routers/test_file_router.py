# -*- coding: utf-8 -*-
"""Location: ./tests/unit/execgateway/routers/test_file_router.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for the file persistence endpoints.
"""

# Third-Party
import pytest


@pytest.fixture
def owner_id(client):
    return client.post("/api/v1/user/", json={"username": "linus", "email": "linus@example.com"}).json()["id"]


def test_create_and_get_file(client, owner_id):
    response = client.post("/api/v1/file/", json={"name": "main.py", "language": "python", "content": "print(1)", "owner_id": owner_id})
    assert response.status_code == 201
    created = response.json()
    assert created["owner_id"] == owner_id
    assert created["content"] == "print(1)"

    fetched = client.get(f"/api/v1/file/{created['id']}").json()
    assert fetched["name"] == "main.py"


def test_create_file_defaults_to_empty_content(client):
    response = client.post("/api/v1/file/", json={"name": "scratch.js", "language": "javascript"})
    assert response.status_code == 201
    assert response.json()["content"] == ""
    assert response.json()["owner_id"] is None


def test_create_file_unknown_owner(client):
    response = client.post("/api/v1/file/", json={"name": "a.py", "language": "python", "owner_id": "ghost"})
    assert response.status_code == 404


def test_list_files_by_owner(client, owner_id):
    client.post("/api/v1/file/", json={"name": "mine.py", "language": "python", "owner_id": owner_id})
    client.post("/api/v1/file/", json={"name": "orphan.py", "language": "python"})

    assert len(client.get("/api/v1/file/").json()) == 2
    mine = client.get("/api/v1/file/", params={"owner_id": owner_id}).json()
    assert [f["name"] for f in mine] == ["mine.py"]


def test_update_file_is_partial(client):
    file_id = client.post("/api/v1/file/", json={"name": "a.py", "language": "python", "content": "x = 1"}).json()["id"]

    response = client.put(f"/api/v1/file/{file_id}", json={"content": "x = 2"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["content"] == "x = 2"
    assert updated["name"] == "a.py"
    assert updated["language"] == "python"


def test_update_unknown_file(client):
    assert client.put("/api/v1/file/nope", json={"content": ""}).status_code == 404


def test_delete_file(client):
    file_id = client.post("/api/v1/file/", json={"name": "a.py", "language": "python"}).json()["id"]
    assert client.delete(f"/api/v1/file/{file_id}").status_code == 204
    assert client.get(f"/api/v1/file/{file_id}").status_code == 404
    assert client.delete(f"/api/v1/file/{file_id}").status_code == 404


def test_store_connected_once_across_requests(client, app):
    for i in range(5):
        client.post("/api/v1/file/", json={"name": f"f{i}.py", "language": "python"})
    client.get("/api/v1/file/")
    assert app.state.connection_manager.attempts == 1
