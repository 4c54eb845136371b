import pytest

from app.api.v1.endpoints import settings as settings_endpoint


class TestHealth:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_liveness(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_readiness(self, client):
        response = client.get("/api/v1/health/ready")

        assert response.json() == {"status": "ok", "database": "connected"}


class TestExerciseCreate:
    """Tests for POST /exercises validation"""

    def test_custom_exercise_needs_owner(self, client):
        response = client.post("/api/v1/exercises", json={"name": "Landmine Press", "is_custom": True})

        assert response.status_code == 422

    def test_unknown_exercise_type_is_rejected(self, client):
        response = client.post("/api/v1/exercises", json={"name": "Flow", "exercise_type": "yoga"})

        assert response.status_code == 422

    def test_create(self, client, fake_db):
        response = client.post(
            "/api/v1/exercises",
            json={
                "name": "Farmer's Carry",
                "exercise_type": "weight_distance",
                "equipment_type": "dumbbell",
                "is_custom": True,
                "created_by": "user-1",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["exercise_type"] == "weight_distance"
        assert data["equipment_type"] == "dumbbell"
        assert data["is_custom"] is True
        assert fake_db.added[-1].name == "Farmer's Carry"


class TestSettingsEndpoint:
    """Tests for GET/PATCH /settings"""

    @pytest.fixture(autouse=True)
    def _settings(self, monkeypatch, user_settings):
        self.row = user_settings

        async def fake_get_user_settings(db):
            return self.row

        monkeypatch.setattr(settings_endpoint, "get_user_settings", fake_get_user_settings)

    def test_read(self, client):
        data = client.get("/api/v1/settings").json()

        assert data["current_bodyweight"] == 80.0
        assert data["kettlebell_increment"] == 4.0

    def test_partial_update(self, client):
        response = client.patch(
            "/api/v1/settings",
            json={"barbell_increment": 5, "partial_reps_volume_weight": "half"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["barbell_increment"] == 5
        assert data["partial_reps_volume_weight"] == "half"
        assert data["dumbbell_increment"] == 2.0
        assert self.row.barbell_increment == 5

    def test_increment_must_be_positive(self, client):
        response = client.patch("/api/v1/settings", json={"default_increment": 0})

        assert response.status_code == 422

    @pytest.mark.parametrize("field", ["barbell_increment", "weight_unit", "partial_reps_volume_weight"])
    def test_null_is_rejected_for_required_settings(self, client, field):
        before = getattr(self.row, field)

        response = client.patch("/api/v1/settings", json={field: None})

        assert response.status_code == 422
        assert getattr(self.row, field) == before

    def test_bodyweight_can_be_cleared(self, client):
        response = client.patch("/api/v1/settings", json={"current_bodyweight": None})

        assert response.status_code == 200
        assert response.json()["current_bodyweight"] is None
        assert self.row.current_bodyweight is None
