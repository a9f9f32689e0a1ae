"""Tests for trainer endpoints."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def assigned(client: TestClient, trainer, individual):
    response = client.post(f"/api/trainers/{trainer.id}/clients/{individual.id}")
    assert response.status_code == 201
    return individual


class TestClients:
    def test_assign_and_list(self, client: TestClient, trainer, assigned):
        clients = client.get(f"/api/trainers/{trainer.id}/clients").json()
        assert [c["id"] for c in clients] == [assigned.id]

        alerts = client.get("/api/alerts", params={"subject_id": assigned.id}).json()
        assert alerts[0]["alert_type"] == "TRAINER_ASSIGNED"

    def test_individual_cannot_take_clients(self, client: TestClient, individual, trainer):
        response = client.post(f"/api/trainers/{individual.id}/clients/{trainer.id}")
        assert response.status_code == 422

    def test_remove(self, client: TestClient, trainer, assigned):
        response = client.delete(f"/api/trainers/{trainer.id}/clients/{assigned.id}")
        assert response.status_code == 204
        assert client.get(f"/api/trainers/{trainer.id}/clients").json() == []

    def test_remove_unassigned_client(self, client: TestClient, trainer, individual):
        response = client.delete(f"/api/trainers/{trainer.id}/clients/{individual.id}")
        assert response.status_code == 404

    def test_unassigned_client_progress_hidden(self, client: TestClient, trainer, individual):
        response = client.get(f"/api/trainers/{trainer.id}/clients/{individual.id}/steps")
        assert response.status_code == 404


class TestPlans:
    def test_create_and_list(self, client: TestClient, trainer, assigned):
        response = client.post(
            f"/api/trainers/{trainer.id}/plans",
            json={"client_id": assigned.id, "plan_type": "diet", "title": "More greens"},
        )
        assert response.status_code == 201
        plan = response.json()
        assert plan["plan_type"] == "diet"

        plans = client.get(f"/api/trainers/{trainer.id}/plans").json()
        assert [p["id"] for p in plans] == [plan["id"]]
        client_plans = client.get(f"/api/subjects/{assigned.id}/plans").json()
        assert [p["title"] for p in client_plans] == ["More greens"]

        assert client.delete(f"/api/trainers/plans/{plan['id']}").status_code == 204
        assert client.get(f"/api/trainers/{trainer.id}/plans").json() == []

    def test_client_goal(self, client: TestClient, trainer, assigned, frozen_today):
        response = client.post(
            f"/api/trainers/{trainer.id}/clients/{assigned.id}/goals",
            json={
                "goal_type": "workout_duration",
                "target_value": 150,
                "start_date": "2026-03-09",
                "end_date": "2026-03-15",
            },
        )
        assert response.status_code == 201
        alerts = client.get("/api/alerts", params={"subject_id": assigned.id}).json()
        assert alerts[0]["alert_type"] == "NEW_GOAL"


class TestClientProgress:
    def test_steps(self, client: TestClient, trainer, assigned, frozen_today):
        for day, steps in (("2026-03-13", 4000), ("2026-03-14", 12000)):
            client.post(
                f"/api/activity/{assigned.id}/steps", json={"steps": steps, "log_date": day}
            )
        data = client.get(f"/api/trainers/{trainer.id}/clients/{assigned.id}/steps").json()
        assert data["totalSteps"] == 16000
        assert data["averageSteps"] == 8000
        assert data["bestDay"] == {"date": "2026-03-14", "value": 12000}
        assert len(data["logs"]) == 2

    def test_health(self, client: TestClient, trainer, assigned):
        for day, weight in (("2026-01-01", 90), ("2026-03-01", 85)):
            client.post(
                f"/api/measurements/{assigned.id}",
                json={"weight_kg": weight, "height_cm": 175, "measured_on": day},
            )
        data = client.get(f"/api/trainers/{trainer.id}/clients/{assigned.id}/health").json()
        assert data["latest"]["weight_kg"] == 85
        assert data["weightChange"] == -5
        assert data["idealWeightRange"] == {"min_kg": 56.7, "max_kg": 76.3}

    def test_trends_default_weeks(self, client: TestClient, trainer, assigned, frozen_today):
        data = client.get(f"/api/trainers/{trainer.id}/clients/{assigned.id}/trends").json()
        assert len(data["weeklyData"]) == 4
        assert data["stepsTrend"] == "stable"
