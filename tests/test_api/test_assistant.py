"""Tests for assistant endpoints."""

from fastapi.testclient import TestClient


class TestAssistant:
    def test_topics(self, client: TestClient):
        data = client.get("/api/assistant/topics").json()
        assert "bmi" in data["topics"]
        assert "sleep" in data["tip_categories"]

    def test_bmi_reply(self, client: TestClient, individual, frozen_today):
        client.post(
            f"/api/measurements/{individual.id}", json={"weight_kg": 70, "height_cm": 175}
        )
        response = client.post(f"/api/assistant/{individual.id}", json={"topic": "bmi"})
        assert response.status_code == 200
        data = response.json()
        assert data["topic"] == "bmi"
        assert "Category: Normal" in data["response"]

    def test_unknown_topic(self, client: TestClient, individual):
        response = client.post(f"/api/assistant/{individual.id}", json={"topic": "weather"})
        assert response.status_code == 422
