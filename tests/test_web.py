"""Tests for the JSON API."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from routinize.web import create_app


@pytest.fixture
def client(data_dir):
    """A client against a fresh database in a temporary data directory."""
    with TestClient(create_app()) as c:
        yield c


def _generate(client, **overrides):
    body = {"userId": "user-1", "frequency": 3, "seed": 1, "save": True, **overrides}
    response = client.post("/api/routines/generate", json=body)
    assert response.status_code == 200, response.text
    return response.json()


class TestHealthAndStructure:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_structure_is_complete_after_startup(self, client):
        data = client.get("/api/database/structure").json()
        assert data["healthy"]
        assert data["missing"] == []
        assert "progress-photos" in data["storageBuckets"]

    def test_fix_structure_is_noop(self, client):
        data = client.post("/api/database/fix-structure").json()
        assert data == {"success": True, "applied": [], "missing": []}


class TestProfileApi:
    def test_create_show_update(self, client):
        response = client.post(
            "/api/profile/create",
            json={"userId": "user-1", "fullName": "Test User", "goal": "strength"},
        )
        assert response.status_code == 201
        assert response.json()["profile"]["fullName"] == "Test User"

        response = client.put("/api/profile/user-1", json={"weight": 81.5})
        assert response.json()["profile"]["weight"] == 81.5
        assert response.json()["profile"]["goal"] == "strength"

        shown = client.get("/api/profile/user-1").json()["profile"]
        assert shown["weight"] == 81.5

    def test_duplicate_profile(self, client):
        client.post("/api/profile/create", json={"userId": "user-1"})
        response = client.post("/api/profile/create", json={"userId": "user-1"})
        assert response.status_code == 422
        assert "already exists" in response.json()["error"]

    def test_missing_profile(self, client):
        response = client.get("/api/profile/nobody")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_request_validation(self, client):
        response = client.post("/api/profile/create", json={"userId": "u", "weight": -1})
        assert response.status_code == 422
        assert response.json()["details"]


class TestExercisesApi:
    def test_search(self, client):
        names = [e["name"] for e in client.get("/api/exercises", params={"q": "ohp"}).json()["exercises"]]
        assert names == ["Overhead Press"]

    def test_grouped(self, client):
        data = client.get("/api/exercises", params={"grouped": True}).json()["exercises"]
        assert "legs" in data
        assert any(e["name"] == "Squat" for e in data["legs"])


class TestRoutinesApi:
    def test_generate_and_save(self, client):
        data = _generate(client)
        routine = data["routine"]

        assert data["saved"]
        assert len(routine["days"]) == 3
        assert routine["days"][0]["exerciseSets"][0]["exerciseId"] is not None
        assert routine["name"] in data["summary"]

        listed = client.get("/api/routines", params={"user_id": "user-1"}).json()
        assert [r["id"] for r in listed["routines"]] == [routine["id"]]

    def test_generate_without_saving(self, client):
        data = _generate(client, save=False)
        response = client.get(f"/api/routines/{data['routine']['id']}")
        assert response.status_code == 404

    def test_invalid_frequency(self, client):
        response = client.post(
            "/api/routines/generate", json={"userId": "user-1", "frequency": 9}
        )
        assert response.status_code == 422
        assert "frequency" in response.json()["error"]

    def test_update_and_delete(self, client):
        routine_id = _generate(client)["routine"]["id"]

        response = client.put(f"/api/routines/{routine_id}", json={"isActive": False})
        assert response.json()["routine"]["isActive"] is False

        assert client.delete(f"/api/routines/{routine_id}").status_code == 200
        assert client.delete(f"/api/routines/{routine_id}").status_code == 404

    def test_update_toggles_active_and_renames(self, client):
        routine_id = _generate(client)["routine"]["id"]

        response = client.put(
            f"/api/routines/{routine_id}", json={"name": "Block A", "isActive": False}
        )
        routine = response.json()["routine"]
        assert routine["name"] == "Block A"
        assert routine["isActive"] is False

        active = client.get(
            "/api/routines", params={"user_id": "user-1", "active_only": True}
        ).json()
        assert active["routines"] == []

        client.put(f"/api/routines/{routine_id}", json={"isActive": True})
        active = client.get(
            "/api/routines", params={"user_id": "user-1", "active_only": True}
        ).json()
        assert [r["name"] for r in active["routines"]] == ["Block A"]

    def test_update_missing_routine(self, client):
        response = client.put("/api/routines/nope", json={"isActive": False})
        assert response.status_code == 404

    def test_options(self, client):
        data = client.get("/api/routines/options").json()
        assert any(t["name"] == "Drop Sets" for t in data["techniques"])
        assert len(data["longTermPlans"]) == 5


class TestHabitsApi:
    def test_create_complete_list(self, client):
        habit = client.post(
            "/api/habits", json={"userId": "user-1", "title": "Meditate"}
        ).json()["habit"]

        first = client.post(f"/api/habits/{habit['id']}/complete", json={"date": "2024-03-01"})
        again = client.post(f"/api/habits/{habit['id']}/complete", json={"date": "2024-03-01"})
        assert first.json()["habit"]["streak"] == 1
        assert again.json()["habit"]["streak"] == 1

        listed = client.get("/api/habits", params={"user_id": "user-1"}).json()["habits"]
        assert listed[0]["title"] == "Meditate"
        assert "completionRate" in listed[0]

    def test_complete_unknown(self, client):
        response = client.post("/api/habits/999/complete", json={})
        assert response.status_code == 404


class TestWellnessAndDashboard:
    def test_log_and_dashboard(self, client):
        today = date.today().isoformat()
        client.post(
            "/api/wellness/mood",
            json={"userId": "user-1", "date": today, "moodLevel": 4, "stressLevel": 20},
        )
        client.post(
            "/api/wellness/sleep",
            json={"userId": "user-1", "date": today, "duration": 480, "quality": 90,
                  "startTime": "23:00", "endTime": "07:00"},
        )
        client.post(
            "/api/wellness/nutrition",
            json={"userId": "user-1", "date": today, "foodName": "Rice", "calories": 350},
        )

        moods = client.get("/api/wellness/mood", params={"user_id": "user-1"}).json()
        assert moods["entries"][0]["moodLevel"] == 4

        dashboard = client.get("/api/dashboard/user-1").json()
        assert dashboard["sleep"]["total_entries"] == 1
        assert dashboard["nutrition"]["totals"]["calories"] == 350
        assert dashboard["wellness"]["score"] > 0

    def test_bad_sleep_time(self, client):
        response = client.post(
            "/api/wellness/sleep",
            json={"userId": "u", "date": "2024-03-01", "duration": 400, "startTime": "11pm"},
        )
        assert response.status_code == 422


class TestCorporateApi:
    def test_challenge_flow(self, client):
        program = client.post(
            "/api/corporate/programs", json={"companyId": "acme", "name": "Spring"}
        ).json()["program"]
        challenge = client.post(
            f"/api/corporate/programs/{program['id']}/challenges",
            json={"title": "10k", "targetValue": 100},
        ).json()["challenge"]

        client.post(f"/api/corporate/challenges/{challenge['id']}/join", json={"userId": "a"})
        progress = client.post(
            f"/api/corporate/challenges/{challenge['id']}/progress",
            json={"userId": "a", "value": 100},
        ).json()
        assert progress["participant"]["completed"] is True

        board = client.get(f"/api/corporate/challenges/{challenge['id']}/leaderboard").json()
        assert board["leaderboard"][0]["rank"] == 1
        assert "userId" not in board["leaderboard"][0]

        shown = client.get(f"/api/corporate/programs/{program['id']}").json()
        assert shown["program"]["participantsCount"] == 1
        assert len(shown["challenges"]) == 1


class TestAvatarApi:
    def test_default_then_customize(self, client):
        avatar = client.get("/api/avatar/user-1").json()["avatar"]
        assert avatar["isDefault"]
        assert avatar["level"] == 1

        response = client.post(
            "/api/avatar/user-1/customize", json={"name": "Rex"}
        )
        assert response.json()["avatar"]["name"] == "Rex"

    def test_locked_accessory(self, client):
        response = client.post(
            "/api/avatar/user-1/customize",
            json={"customization": {"accessories": ["champion_medal"]}},
        )
        assert response.status_code == 422

    def test_experience(self, client):
        data = client.post("/api/avatar/user-1/experience", json={"points": 120}).json()
        assert data["levelledUp"]
        assert data["avatar"]["level"] == 2
