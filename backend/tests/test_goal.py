"""Tests for the goal weight routes."""

import pytest


def test_goal_defaults_to_null(alice):
    response = alice.get("/api/user/goal")

    assert response.status_code == 200
    assert response.json() == {"goalWeight": None}


def test_set_and_read_goal(alice):
    response = alice.post("/api/user/goal", json={"goalWeight": 68.5})

    assert response.status_code == 200
    assert response.json() == {"goalWeight": 68.5, "success": True}
    assert alice.get("/api/user/goal").json() == {"goalWeight": 68.5}


def test_integer_goal(alice):
    assert alice.post("/api/user/goal", json={"goalWeight": 70}).json()["goalWeight"] == 70


def test_clear_goal(alice):
    alice.post("/api/user/goal", json={"goalWeight": 68.5})

    response = alice.post("/api/user/goal", json={"goalWeight": None})

    assert response.status_code == 200
    assert response.json()["goalWeight"] is None
    assert alice.get("/api/user/goal").json() == {"goalWeight": None}


@pytest.mark.parametrize("value", [0, -5, "70", True, [70]])
def test_invalid_goal(alice, value):
    alice.post("/api/user/goal", json={"goalWeight": 60})

    response = alice.post("/api/user/goal", json={"goalWeight": value})

    assert response.status_code == 400
    assert alice.get("/api/user/goal").json() == {"goalWeight": 60}


def test_missing_goal_key(alice):
    assert alice.post("/api/user/goal", json={}).status_code == 400


def test_goal_is_per_user(alice, bob):
    alice.post("/api/user/goal", json={"goalWeight": 60})

    assert bob.get("/api/user/goal").json() == {"goalWeight": None}


def test_goal_requires_session(client):
    assert client.get("/api/user/goal").status_code == 401
    assert client.post("/api/user/goal", json={"goalWeight": 60}).status_code == 401
