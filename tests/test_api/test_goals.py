"""Tests for goal endpoints."""

from fastapi.testclient import TestClient


def create_steps_goal(client: TestClient, subject_id: int, target: int = 10000) -> dict:
    response = client.post(
        "/api/goals",
        json={
            "subject_id": subject_id,
            "goal_type": "steps",
            "target_value": target,
            "start_date": "2026-03-01",
            "end_date": "2026-03-31",
        },
    )
    assert response.status_code == 201
    return response.json()


class TestCreateGoal:
    def test_create(self, client: TestClient, individual, frozen_today):
        goal = create_steps_goal(client, individual.id)
        assert goal["status"] == "in_progress"
        assert goal["current_value"] == 0
        assert goal["progress_percentage"] == 0

    def test_counts_existing_activity(self, client: TestClient, individual, frozen_today):
        client.post(
            f"/api/activity/{individual.id}/steps",
            json={"steps": 3000, "log_date": "2026-03-10"},
        )
        goal = create_steps_goal(client, individual.id)
        assert goal["current_value"] == 3000

    def test_invalid_target(self, client: TestClient, individual, frozen_today):
        response = client.post(
            "/api/goals",
            json={
                "subject_id": individual.id,
                "goal_type": "steps",
                "target_value": 0,
                "start_date": "2026-03-01",
                "end_date": "2026-03-31",
            },
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_GOAL"

    def test_end_before_start(self, client: TestClient, individual, frozen_today):
        response = client.post(
            "/api/goals",
            json={
                "subject_id": individual.id,
                "goal_type": "weight",
                "target_value": 70,
                "start_date": "2026-03-31",
                "end_date": "2026-03-01",
            },
        )
        assert response.status_code == 422


class TestGoalProgress:
    """A 10000-step goal completes once and alerts once."""

    def test_completion_via_logged_steps(self, client: TestClient, individual, frozen_today):
        goal = create_steps_goal(client, individual.id)
        client.post(f"/api/activity/{individual.id}/steps", json={"steps": 10000})

        data = client.get(f"/api/goals/{goal['id']}").json()
        assert data["status"] == "completed"
        assert data["progress_percentage"] == 100.0

        client.post(f"/api/activity/{individual.id}/steps", json={"steps": 12000})
        alerts = client.get("/api/alerts", params={"subject_id": individual.id}).json()
        assert [a["alert_type"] for a in alerts].count("GOAL_COMPLETED") == 1

    def test_manual_progress(self, client: TestClient, individual, frozen_today):
        goal = create_steps_goal(client, individual.id)
        response = client.put(f"/api/goals/{goal['id']}/progress", json={"current_value": 5000})
        data = response.json()
        assert data["goal"]["progress_percentage"] == 50.0
        assert data["alert"] is None

        response = client.put(
            f"/api/goals/{goal['id']}/progress", json={"current_value": 10000}
        )
        assert response.json()["alert"]["alert_type"] == "GOAL_COMPLETED"

    def test_list_active_only(self, client: TestClient, individual, frozen_today):
        create_steps_goal(client, individual.id)
        client.post(
            "/api/goals",
            json={
                "subject_id": individual.id,
                "goal_type": "steps",
                "target_value": 100,
                "start_date": "2026-01-01",
                "end_date": "2026-01-31",
            },
        )
        all_goals = client.get("/api/goals", params={"subject_id": individual.id}).json()
        statuses = sorted(goal["status"] for goal in all_goals)
        assert statuses == ["failed", "in_progress"]

        active = client.get(
            "/api/goals", params={"subject_id": individual.id, "active_only": True}
        ).json()
        assert len(active) == 1

    def test_list_unknown_subject(self, client: TestClient):
        response = client.get("/api/goals", params={"subject_id": 999})
        assert response.status_code == 404

    def test_delete(self, client: TestClient, individual, frozen_today):
        goal = create_steps_goal(client, individual.id)
        assert client.delete(f"/api/goals/{goal['id']}").status_code == 204
        assert client.get(f"/api/goals/{goal['id']}").status_code == 404
