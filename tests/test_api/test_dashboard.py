"""Tests for dashboard endpoints."""

from fastapi.testclient import TestClient


class TestDashboard:
    def test_individual(self, client: TestClient, individual, frozen_today):
        client.post(f"/api/activity/{individual.id}/steps", json={"steps": 9000})
        response = client.get(f"/api/dashboard/{individual.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["todaySteps"] == 9000
        assert data["weeklyStepsChart"][-1] == {"date": "2026-03-15", "steps": 9000}
        assert data["weekly"]["totalSteps"] == 9000

    def test_individual_unknown(self, client: TestClient, frozen_today):
        assert client.get("/api/dashboard/999").status_code == 404

    def test_trainer(self, client: TestClient, trainer, individual, frozen_today):
        client.post(f"/api/trainers/{trainer.id}/clients/{individual.id}")
        client.post(
            f"/api/trainers/{trainer.id}/plans",
            json={"client_id": individual.id, "plan_type": "workout", "title": "Intervals"},
        )
        data = client.get(f"/api/dashboard/trainer/{trainer.id}").json()
        assert data["totalClients"] == 1
        assert data["recentPlans"][0]["title"] == "Intervals"
        assert data["clientsNeedingAttention"][0]["clientId"] == individual.id
