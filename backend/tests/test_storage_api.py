from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.app import app
from backend.storage.repository import clear_store

client = TestClient(app)

TASK_BODY = {
    "type": "explore",
    "detail": "Walk along Southbank Promenade",
    "reward_type": "gold",
    "completion_criteria": "Check in with a photo at Southbank Promenade",
}
REWARD_BODY = {
    "code": "REWARD001",
    "name": "Free Dessert at Movida",
    "description": "Enjoy Free Dessert when you visit Movida in Melbourne.",
}
USER_BODY = {"username": "sam", "google_id": "g-1", "preferences": ["explore", "food"]}


@pytest.fixture(autouse=True)
def _clean_store():
    clear_store()
    yield
    clear_store()


def _create(path: str, body: dict) -> dict:
    resp = client.post(path, json=body)
    assert resp.status_code == 201
    return resp.json()


# ── Tasks ────────────────────────────────────────────────────────────────


def test_task_crud_cycle():
    task = _create("/tasks", TASK_BODY)
    assert task["task_completed"] is False

    assert client.get(f"/tasks/{task['id']}").json()["detail"] == TASK_BODY["detail"]
    assert [t["id"] for t in client.get("/tasks").json()] == [task["id"]]

    resp = client.put(f"/tasks/{task['id']}", json={"task_completed": True})
    assert resp.status_code == 200
    assert resp.json()["task_completed"] is True
    assert resp.json()["detail"] == TASK_BODY["detail"]

    resp = client.delete(f"/tasks/{task['id']}")
    assert resp.json() == {"message": "Task deleted successfully"}
    assert client.get(f"/tasks/{task['id']}").status_code == 404


def test_task_not_found_uses_error_body():
    resp = client.get("/tasks/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Task not found"}


def test_task_rejects_unknown_type():
    resp = client.post("/tasks", json={**TASK_BODY, "type": "sleep"})
    assert resp.status_code == 422


# ── Rewards ──────────────────────────────────────────────────────────────


def test_reward_crud_by_code():
    _create("/rewards", REWARD_BODY)

    assert client.get("/rewards/REWARD001").json()["name"] == REWARD_BODY["name"]

    resp = client.put("/rewards/REWARD001", json={"redeemed": True})
    assert resp.json()["redeemed"] is True

    assert client.delete("/rewards/REWARD001").json() == {"message": "Reward deleted successfully"}
    assert client.get("/rewards/REWARD001").status_code == 404


def test_reward_duplicate_code_rejected():
    _create("/rewards", REWARD_BODY)

    resp = client.post("/rewards", json=REWARD_BODY)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Reward with this code already exists"}


# ── Users ────────────────────────────────────────────────────────────────


def test_user_crud_cycle():
    user = _create("/users", USER_BODY)
    assert user["preferences"] == ["explore", "food"]
    assert user["exp"] == 0

    resp = client.put(f"/users/{user['id']}", json={"preferences": ["shop"]})
    assert resp.json()["preferences"] == ["shop"]

    assert len(client.get("/users").json()) == 1
    assert client.delete(f"/users/{user['id']}").status_code == 200
    assert client.get(f"/users/{user['id']}").json() == {"error": "User not found"}


def test_user_duplicate_google_id_rejected():
    _create("/users", USER_BODY)

    resp = client.post("/users", json={**USER_BODY, "username": "other"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "User already exists"}


def test_assign_and_remove_reward():
    user = _create("/users", USER_BODY)
    reward = _create("/rewards", REWARD_BODY)
    path = f"/users/{user['id']}/reward/{reward['id']}"

    resp = client.post(path)
    assert resp.status_code == 200
    assert resp.json()["user"]["rewards_earned"] == [reward["id"]]

    assert client.post(path).json() == {"error": "Reward already assigned"}

    resp = client.delete(path)
    assert resp.json()["user"]["rewards_earned"] == []


def test_assign_missing_reward():
    user = _create("/users", USER_BODY)

    resp = client.post(f"/users/{user['id']}/reward/nope")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Reward not found"}


def test_assign_complete_and_remove_task():
    user = _create("/users", USER_BODY)
    task = _create("/tasks", TASK_BODY)
    path = f"/users/{user['id']}/task/{task['id']}"

    resp = client.post(path)
    assert resp.json()["user"]["tasks"] == [{"task_id": task["id"], "completed": False}]

    resp = client.post(path)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Task already assigned"}

    resp = client.post(f"{path}/complete")
    assert resp.json()["user"]["tasks"] == [{"task_id": task["id"], "completed": True}]

    resp = client.delete(path)
    assert resp.json()["user"]["tasks"] == []


def test_complete_unassigned_task():
    user = _create("/users", USER_BODY)
    task = _create("/tasks", TASK_BODY)

    resp = client.post(f"/users/{user['id']}/task/{task['id']}/complete")

    assert resp.status_code == 404


def test_assignment_for_missing_user():
    resp = client.post("/users/nobody/task/whatever")
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


# ── Update validation ────────────────────────────────────────────────────


@patch("backend.recommendations.engine.resolve_location", return_value=None)
def test_task_update_rejects_null_type_and_keeps_recommend_working(mock_resolve):
    user = _create("/users", {**USER_BODY, "preferences": ["explore"]})
    task = _create("/tasks", TASK_BODY)

    resp = client.put(f"/tasks/{task['id']}", json={"type": None})

    assert resp.status_code == 422
    assert "type" in resp.json()["error"]
    assert client.get(f"/tasks/{task['id']}").json()["type"] == "explore"

    resp = client.get(f"/recommend/{user['id']}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "no suitable tasks found"}


def test_reward_update_rejects_null_name():
    _create("/rewards", REWARD_BODY)

    resp = client.put("/rewards/REWARD001", json={"name": None})

    assert resp.status_code == 422
    assert client.get("/rewards/REWARD001").json()["name"] == REWARD_BODY["name"]


def test_user_update_rejects_null_preferences():
    user = _create("/users", USER_BODY)

    resp = client.put(f"/users/{user['id']}", json={"preferences": None})

    assert resp.status_code == 422
    assert client.get(f"/users/{user['id']}").json()["preferences"] == ["explore", "food"]
