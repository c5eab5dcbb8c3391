from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.app import app
from backend.conditions.models import TrafficSnapshot, WeatherSnapshot
from backend.storage.models import TaskCreate, UserCreate
from backend.storage.repository import clear_store, create_task, create_user

client = TestClient(app)


@pytest.fixture(autouse=True)
def _clean_store():
    clear_store()
    yield
    clear_store()


def _explorer() -> str:
    user = create_user(UserCreate(username="sam", google_id="g-1", preferences=["explore"]))
    return user.id


def _add_task(detail: str, type: str = "explore") -> str:
    task = create_task(TaskCreate(type=type, detail=detail, reward_type="silver"))
    return task.id


def _weather(category: str):
    return lambda location: WeatherSnapshot(location=location, category=category)


def _traffic(*durations):
    return lambda location: TrafficSnapshot(location=location, route_durations=list(durations))


@patch("backend.recommendations.engine.fetch_traffic", side_effect=_traffic(600))
@patch("backend.recommendations.engine.fetch_weather", side_effect=_weather("Clear"))
@patch("backend.recommendations.engine.resolve_location", return_value="Federation Square")
def test_recommend_returns_favorable_task(mock_resolve, mock_weather, mock_traffic):
    user_id = _explorer()
    task_id = _add_task("Take a photo at Federation Square")
    _add_task("Try a new dish at Chin Chin", type="food")

    resp = client.get(f"/recommend/{user_id}")

    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 1
    item = body[0]
    assert item["id"] == task_id
    assert item["type"] == "explore"
    assert item["detail"] == "Take a photo at Federation Square"
    assert item["task_completed"] is False
    assert item["exp"] > 0
    mock_resolve.assert_called_once_with("Take a photo at Federation Square")
    mock_weather.assert_called_once_with("Federation Square")


@patch("backend.recommendations.engine.fetch_traffic", side_effect=_traffic(600))
@patch("backend.recommendations.engine.fetch_weather", side_effect=_weather("Rain"))
@patch("backend.recommendations.engine.resolve_location", return_value="Federation Square")
def test_recommend_rain_returns_404(mock_resolve, mock_weather, mock_traffic):
    user_id = _explorer()
    _add_task("Take a photo at Federation Square")

    resp = client.get(f"/recommend/{user_id}")

    assert resp.status_code == 404
    assert resp.json() == {"error": "no suitable tasks found"}


@patch("backend.recommendations.engine.fetch_traffic")
@patch("backend.recommendations.engine.fetch_weather")
@patch("backend.recommendations.engine.resolve_location")
def test_recommend_unknown_user_returns_404(mock_resolve, mock_weather, mock_traffic):
    resp = client.get("/recommend/does-not-exist")

    assert resp.status_code == 404
    assert resp.json() == {"error": "user preferences not found"}
    mock_resolve.assert_not_called()
    mock_weather.assert_not_called()
    mock_traffic.assert_not_called()


def test_recommend_no_matching_tasks_returns_404():
    user_id = _explorer()
    _add_task("Buy a souvenir from Myer", type="shop")

    resp = client.get(f"/recommend/{user_id}")

    assert resp.status_code == 404
    assert resp.json() == {"error": "no tasks found matching preferences"}


@patch("backend.recommendations.engine.fetch_traffic", side_effect=_traffic(600))
@patch("backend.recommendations.engine.fetch_weather", side_effect=_weather("Clear"))
@patch("backend.recommendations.engine.resolve_location", side_effect=lambda d: d.rsplit(" ", 1)[-1])
def test_recommend_caps_at_five(mock_resolve, mock_weather, mock_traffic):
    user_id = _explorer()
    ids = [_add_task(f"Explore spot{n}") for n in range(8)]

    resp = client.get(f"/recommend/{user_id}")

    assert resp.status_code == 200
    assert [item["id"] for item in resp.json()] == ids[:5]
    assert mock_weather.call_count == 5
    assert mock_traffic.call_count == 5


@patch("backend.recommendations.engine.fetch_traffic", side_effect=_traffic(600))
@patch("backend.recommendations.engine.fetch_weather", side_effect=_weather("Clear"))
@patch("backend.recommendations.engine.resolve_location", return_value="NGV")
def test_recommend_is_stable_across_calls(mock_resolve, mock_weather, mock_traffic):
    user_id = _explorer()
    for n in range(3):
        _add_task(f"Join a guided tour at NGV #{n}")

    first = client.get(f"/recommend/{user_id}").json()
    second = client.get(f"/recommend/{user_id}").json()

    assert [item["id"] for item in first] == [item["id"] for item in second]


@patch("backend.recommendations.engine.get_user", side_effect=RuntimeError("store offline"))
def test_recommend_unexpected_error_returns_500(mock_get_user):
    c = TestClient(app, raise_server_exceptions=False)

    resp = c.get("/recommend/anyone")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
