"""Tests for the weight entry routes."""

from datetime import date, timedelta

import pytest

from conftest import register
from weight_tracker import models


def add_weight(client, entry_date, weight, notes=None):
    body = {"date": str(entry_date), "weight": weight}
    if notes is not None:
        body["notes"] = notes
    return client.post("/api/weights", json=body)


def test_end_to_end(client):
    response = register(client, "alice", "pw123", "Alice")
    assert response.status_code == 200

    created = add_weight(client, "2024-01-01", 70.5)
    assert created.status_code == 200
    entry = created.json()
    assert entry["weight"] == 70.5
    assert entry["date"] == "2024-01-01"

    weights = client.get("/api/weights").json()["weights"]
    assert len(weights) == 1
    assert weights[0]["weight"] == 70.5
    entry_id = weights[0]["id"]

    updated = client.put("/api/weights", json={"id": entry_id, "date": "2024-01-01", "weight": 69.0})
    assert updated.status_code == 200
    assert updated.json()["weight"] == 69.0
    assert client.get("/api/weights").json()["weights"][0]["weight"] == 69.0

    deleted = client.delete(f"/api/weights?id={entry_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True}
    assert client.get("/api/weights").json() == {"weights": []}


class TestUpsert:
    """Tests for POST /api/weights."""

    def test_same_date_overwrites(self, alice, db_session):
        first = add_weight(alice, "2024-01-01", 70.5, notes="morning")
        second = add_weight(alice, "2024-01-01", 71.0)

        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["weight"] == 71.0
        # Omitted notes are cleared, not kept
        assert second.json()["notes"] is None
        assert db_session.query(models.Weight).count() == 1

    def test_repeated_identical_upsert(self, alice):
        add_weight(alice, "2024-01-01", 70.5, notes="same")
        add_weight(alice, "2024-01-01", 70.5, notes="same")

        weights = alice.get("/api/weights").json()["weights"]
        assert len(weights) == 1
        assert weights[0]["weight"] == 70.5
        assert weights[0]["notes"] == "same"

    def test_list_newest_first(self, alice):
        for day, weight in [("2024-01-02", 70.0), ("2024-01-05", 69.0), ("2024-01-01", 71.0)]:
            add_weight(alice, day, weight)

        dates = [w["date"] for w in alice.get("/api/weights").json()["weights"]]
        assert dates == ["2024-01-05", "2024-01-02", "2024-01-01"]

    @pytest.mark.parametrize("body", [
        {"weight": 70.5},
        {"date": "2024-01-01"},
        {"date": "", "weight": 70.5},
        {"date": "2024-01-01", "weight": 0},
    ])
    def test_missing_date_or_weight(self, alice, body):
        response = alice.post("/api/weights", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Date and weight are required"

    def test_negative_weight(self, alice):
        response = add_weight(alice, "2024-01-01", -3)

        assert response.status_code == 400
        assert response.json()["error"].startswith("weight")

    def test_malformed_date(self, alice):
        response = add_weight(alice, "yesterday", 70)

        assert response.status_code == 400

    def test_requires_session(self, client, db_session):
        response = add_weight(client, "2024-01-01", 70.5)

        assert response.status_code == 401
        assert db_session.query(models.Weight).count() == 0


class TestUpdate:
    """Tests for PUT /api/weights."""

    def test_missing_id(self, alice):
        response = alice.put("/api/weights", json={"date": "2024-01-01", "weight": 70})

        assert response.status_code == 400
        assert response.json()["error"] == "ID and date are required"

    def test_moving_onto_taken_date(self, alice):
        add_weight(alice, "2024-01-01", 70.0)
        other = add_weight(alice, "2024-01-02", 71.0).json()

        response = alice.put("/api/weights", json={"id": other["id"], "date": "2024-01-01", "weight": 71.0})

        assert response.status_code == 400
        assert "2024-01-01" in response.json()["error"]
        assert len(alice.get("/api/weights").json()["weights"]) == 2

    def test_unknown_id_is_silent(self, alice):
        response = alice.put("/api/weights", json={"id": 999, "date": "2024-01-01", "weight": 70.0})

        assert response.status_code == 200
        assert response.json()["id"] == 999
        assert alice.get("/api/weights").json()["weights"] == []


class TestOwnership:
    """Users never see or change each other's entries."""

    def test_list_is_per_user(self, alice, bob):
        add_weight(alice, "2024-01-01", 70.5)
        add_weight(bob, "2024-01-01", 90.0)

        alice_weights = alice.get("/api/weights").json()["weights"]
        bob_weights = bob.get("/api/weights").json()["weights"]
        assert [w["weight"] for w in alice_weights] == [70.5]
        assert [w["weight"] for w in bob_weights] == [90.0]

    def test_cannot_update_foreign_entry(self, alice, bob):
        entry = add_weight(alice, "2024-01-01", 70.5).json()

        response = bob.put("/api/weights", json={"id": entry["id"], "date": "2024-01-01", "weight": 50.0})

        assert response.status_code == 200
        assert alice.get("/api/weights").json()["weights"][0]["weight"] == 70.5
        assert bob.get("/api/weights").json()["weights"] == []

    def test_cannot_delete_foreign_entry(self, alice, bob):
        entry = add_weight(alice, "2024-01-01", 70.5).json()

        response = bob.delete(f"/api/weights?id={entry['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert len(alice.get("/api/weights").json()["weights"]) == 1


class TestDelete:
    """Tests for DELETE /api/weights."""

    def test_missing_id(self, alice):
        response = alice.delete("/api/weights")

        assert response.status_code == 400
        assert response.json()["error"] == "ID is required"

    def test_unknown_id_is_noop(self, alice):
        assert alice.delete("/api/weights?id=12345").json() == {"success": True}

    def test_requires_session(self, client):
        assert client.delete("/api/weights?id=1").status_code == 401


class TestSummary:
    """Tests for GET /api/weights/summary."""

    def test_empty_history(self, alice):
        summary = alice.get("/api/weights/summary").json()

        assert summary["total_entries"] == 0
        assert summary["current_weight"] is None
        assert summary["goal_progress"] is None

    def test_period_and_goal(self, alice):
        today = date.today()
        add_weight(alice, today - timedelta(days=40), 82.0)
        add_weight(alice, today - timedelta(days=10), 80.0)
        add_weight(alice, today - timedelta(days=1), 75.0)
        alice.post("/api/user/goal", json={"goalWeight": 70})

        summary = alice.get("/api/weights/summary?period=30").json()

        assert summary["period"] == "30"
        assert summary["total_entries"] == 3
        assert summary["period_entries"] == 2
        assert summary["current_weight"] == 75.0
        assert summary["previous_weight"] == 80.0
        assert summary["change"] == pytest.approx(-5.0)
        assert summary["trend"] == "loss"
        assert summary["min_weight"] == 75.0
        assert summary["max_weight"] == 80.0
        assert summary["average_weight"] == pytest.approx(77.5)
        assert summary["weight_to_goal"] == pytest.approx(5.0)
        assert summary["goal_progress"] == 50

    def test_invalid_period(self, alice):
        response = alice.get("/api/weights/summary?period=365")

        assert response.status_code == 400
