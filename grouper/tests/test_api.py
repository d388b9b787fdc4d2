"""Tests for the HTTP endpoints."""

import logging

import pytest
from fastapi.testclient import TestClient

from grouper.config import Config
from grouper.errors import ConfigError
from grouper.main import app
from grouper.schemas.grouping_schemas import GroupingRequest
from grouper.services.grouping_service import GroupingService
from grouper.services.singleton import reset_grouping_service


client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_service():
    reset_grouping_service()
    yield
    reset_grouping_service()


def test_root():
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_status_before_any_run():
    response = client.get("/api/status")

    assert response.status_code == 200
    assert response.json()["status"] == "idle"
    assert response.json()["runs"] == 0


def test_create_grouping(roster_csv):
    """Test a posted roster comes back grouped."""
    response = client.post("/api/groups", json={
        "csv": roster_csv,
        "group_count": 2,
        "generation_size": 12,
        "max_generations": 5,
        "random_seed": 8,
    })

    assert response.status_code == 200
    body = response.json()
    assert len(body["assignment"]) == 8
    assert len(body["groups"]) == 2
    assert sum(group["size"] for group in body["groups"]) == 8
    assert body["generations"] == 5
    assert body["score"] >= body["initial_best_score"]

    status = client.get("/api/status").json()
    assert status["runs"] == 1
    assert status["last_score"] == body["score"]

    history = client.get("/api/history", params={"limit": 2}).json()["history"]
    assert [entry["generation"] for entry in history] == [4, 5]


@pytest.mark.parametrize("group_count", [0, 9])
def test_create_grouping_rejects_bad_group_count(roster_csv, group_count):
    response = client.post("/api/groups", json={"csv": roster_csv, "group_count": group_count})

    assert response.status_code == 422


def test_create_grouping_rejects_missing_column():
    response = client.post("/api/groups", json={
        "csv": "name,gender\nAda,F\n",
        "group_count": 1,
    })

    assert response.status_code == 422
    assert "Missing required column" in response.json()["detail"]


def test_create_grouping_uses_configured_defaults(monkeypatch, roster_csv):
    """Test parameters missing from the request come from GROUPER_* settings."""
    monkeypatch.setenv("GROUPER_GROUP_COUNT", "2")
    monkeypatch.setenv("GROUPER_GENERATION_SIZE", "10")
    monkeypatch.setenv("GROUPER_MAX_GENERATIONS", "3")
    reset_grouping_service()

    response = client.post("/api/groups", json={"csv": roster_csv})

    assert response.status_code == 200
    assert len(response.json()["groups"]) == 2
    assert response.json()["generations"] == 3


def test_request_parameters_override_settings(roster_csv):
    service = GroupingService(Config(GROUP_COUNT=2, GENERATION_SIZE=8, MAX_GENERATIONS=2))

    result = service.run_grouping(
        GroupingRequest(csv=roster_csv, group_count=4, max_generations=1)
    )

    assert len(result["groups"]) == 4
    assert result["generations"] == 1


def test_run_number_is_logged_per_run(roster_csv, caplog):
    service = GroupingService(Config(GROUP_COUNT=2, GENERATION_SIZE=6, MAX_GENERATIONS=1))
    request = GroupingRequest(csv=roster_csv)

    with caplog.at_level(logging.INFO, logger="grouper.services.grouping_service"):
        service.run_grouping(request)
        service.run_grouping(request)

    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Grouping run 1:") for message in messages)
    assert any(message.startswith("Grouping run 2:") for message in messages)
    assert service.get_status()["runs"] == 2


@pytest.mark.parametrize("limit", [0, -1])
def test_history_rejects_non_positive_limit(limit):
    response = client.get("/api/history", params={"limit": limit})

    assert response.status_code == 422


def test_service_history_rejects_non_positive_limit():
    with pytest.raises(ConfigError):
        GroupingService(Config()).get_history(limit=-1)
