from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient

from event_backend.database import InMemoryDatabase


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def create(client: TestClient, title: str = "Buy badges", description: str = "For speakers") -> dict:
    response = client.post("/api/todos", json={"title": title, "description": description})
    assert response.status_code == 201
    return response.json()


def test_create_todo(client: TestClient) -> None:
    todo = create(client)

    assert todo["id"]
    assert todo["title"] == "Buy badges"
    assert todo["description"] == "For speakers"
    assert todo["completed"] is False
    assert todo["createdAt"] == todo["updatedAt"]


def test_create_requires_title(client: TestClient, database: InMemoryDatabase) -> None:
    response = client.post("/api/todos", json={"description": "untitled"})

    assert response.status_code == 400
    assert database.todos.count() == 0


def test_list_newest_first(client: TestClient) -> None:
    first = create(client, title="first")
    second = create(client, title="second")

    response = client.get("/api/todos")

    assert response.status_code == 200
    assert [todo["id"] for todo in response.json()] == [second["id"], first["id"]]


def test_partial_update_changes_only_supplied_fields(client: TestClient) -> None:
    todo = create(client)

    response = client.put(f"/api/todos/{todo['id']}", json={"completed": True})

    assert response.status_code == 200
    updated = response.json()
    assert updated["completed"] is True
    assert updated["title"] == "Buy badges"
    assert updated["description"] == "For speakers"
    assert updated["createdAt"] == todo["createdAt"]
    assert parse_time(updated["updatedAt"]) > parse_time(todo["updatedAt"])


def test_update_refreshes_timestamp_even_without_changes(
    client: TestClient, database: InMemoryDatabase
) -> None:
    todo = create(client)

    response = client.patch(f"/api/todos/{todo['id']}", json={})

    assert response.status_code == 200
    assert response.json()["title"] == "Buy badges"
    assert parse_time(response.json()["updatedAt"]) > parse_time(
        todo["updatedAt"]
    )
    assert database.todos.get(todo["id"]).data["updatedAt"] is not None


def test_update_ignores_unknown_fields(client: TestClient) -> None:
    todo = create(client)

    response = client.put(
        f"/api/todos/{todo['id']}",
        json={"title": "Print badges", "owner": "someone", "id": "other"},
    )

    assert response.status_code == 200
    assert response.json()["id"] == todo["id"]
    assert response.json()["title"] == "Print badges"
    assert response.json()["description"] == "For speakers"


def test_update_rejects_wrong_types(client: TestClient) -> None:
    todo = create(client)

    response = client.put(f"/api/todos/{todo['id']}", json={"completed": "yes"})

    assert response.status_code == 400


def test_update_missing_todo(client: TestClient) -> None:
    response = client.put("/api/todos/missing", json={"completed": True})

    assert response.status_code == 404


def test_delete_todo(client: TestClient, database: InMemoryDatabase) -> None:
    todo = create(client)

    response = client.delete(f"/api/todos/{todo['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert database.todos.count() == 0
    assert client.delete(f"/api/todos/{todo['id']}").status_code == 404
