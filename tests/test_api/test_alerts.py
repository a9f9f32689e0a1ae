"""Tests for alert endpoints."""

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError


def raise_bmi_alert(client: TestClient, subject_id: int, weight: float = 95) -> dict:
    response = client.post(
        f"/api/measurements/{subject_id}", json={"weight_kg": weight, "height_cm": 175}
    )
    return response.json()["alert"]


class TestAlerts:
    def test_list_and_count(self, client: TestClient, individual, frozen_today):
        raise_bmi_alert(client, individual.id)
        raise_bmi_alert(client, individual.id, weight=50)

        alerts = client.get("/api/alerts", params={"subject_id": individual.id}).json()
        assert {a["alert_type"] for a in alerts} == {"BMI_OBESE", "BMI_UNDERWEIGHT"}

        count = client.get("/api/alerts/unread-count", params={"subject_id": individual.id})
        assert count.json()["unread"] == 2

    def test_mark_read(self, client: TestClient, individual, frozen_today):
        alert = raise_bmi_alert(client, individual.id)
        response = client.put(f"/api/alerts/{alert['id']}/read")
        assert response.status_code == 200
        assert response.json()["read"] is True

        unread = client.get(
            "/api/alerts", params={"subject_id": individual.id, "unread_only": True}
        ).json()
        assert unread == []

    def test_mark_missing(self, client: TestClient):
        assert client.put("/api/alerts/999/read").status_code == 404

    def test_mark_all_read(self, client: TestClient, individual, frozen_today):
        raise_bmi_alert(client, individual.id)
        raise_bmi_alert(client, individual.id)
        response = client.put("/api/alerts/read-all", params={"subject_id": individual.id})
        assert response.json() == {"updated": 2}

    def test_purge_keeps_recent(self, client: TestClient, individual, frozen_today):
        alert = raise_bmi_alert(client, individual.id)
        client.put(f"/api/alerts/{alert['id']}/read")
        response = client.post("/api/alerts/purge")
        assert response.json() == {"deleted": 0}

    def test_storage_failure_returns_503(self, client: TestClient, individual, mocker):
        subject_id = individual.id
        mocker.patch(
            "sqlalchemy.orm.Session.query",
            side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
        )
        response = client.get("/api/alerts", params={"subject_id": subject_id})
        assert response.status_code == 503
        error = response.json()["error"]
        assert error["code"] == "STORAGE_UNAVAILABLE"
        assert error["details"] == {"operation": "alert.list"}
