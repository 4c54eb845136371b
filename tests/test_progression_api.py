import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.api.v1.endpoints import progression
from app.core.records import SetRecord
from app.services import pr_detection

START = datetime(2026, 3, 2, 7, 30, tzinfo=timezone.utc)


def make_exercise(**overrides):
    values = dict(
        id=uuid.uuid4(),
        name="Bench Press",
        exercise_type="weight_reps",
        equipment_type="barbell",
        primary_muscle_groups=["chest"],
        secondary_muscle_groups=["triceps"],
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def workout(day, *sets, **fields):
    when = START + timedelta(days=day)
    return [
        SetRecord(weight=w, reps=r, performed_at=when, session_id=f"w{day}", **fields)
        for w, r in sets
    ]


class ProgressionApiBase:
    """Patches the DB loaders; tests set `self.exercise` and `self.history`."""

    @pytest.fixture(autouse=True)
    def _loaders(self, monkeypatch, user_settings):
        self.exercise = make_exercise()
        self.history = []
        self.settings = user_settings
        self.loaded_with = {}

        async def fake_get_exercise(db, exercise_id):
            return self.exercise if exercise_id == self.exercise.id else None

        async def fake_load_set_history(db, exercise_id, template_id=None, exclude_workout_id=None):
            self.loaded_with = {"template_id": template_id, "exclude_workout_id": exclude_workout_id}
            return list(self.history)

        async def fake_get_user_settings(db):
            return self.settings

        monkeypatch.setattr(progression, "get_exercise", fake_get_exercise)
        monkeypatch.setattr(progression, "load_set_history", fake_load_set_history)
        monkeypatch.setattr(progression, "get_user_settings", fake_get_user_settings)
        monkeypatch.setattr(pr_detection, "load_set_history", fake_load_set_history)

    def url(self, path):
        return f"/api/v1/exercises/{self.exercise.id}/{path}"


class TestProgressionEndpoint(ProgressionApiBase):
    """Tests for GET /exercises/{id}/progression"""

    def test_unknown_exercise(self, client):
        response = client.get(f"/api/v1/exercises/{uuid.uuid4()}/progression")

        assert response.status_code == 404

    def test_no_history(self, client):
        response = client.get(self.url("progression"))

        assert response.status_code == 200
        data = response.json()
        assert data["rationale"] == "insufficient_history"
        assert data["is_progression"] is False
        assert data["suggested_weight"] is None
        assert data["suggested_reps"] is None

    def test_increase_weight_uses_equipment_increment(self, client):
        self.history = workout(0, (60, 12), (60, 12))

        response = client.get(self.url("progression"), params={"min_reps": 8, "max_reps": 12})

        data = response.json()
        assert data["rationale"] == "increase_weight"
        assert data["suggested_weight"] == 62.5
        assert data["suggested_reps"] == 8
        assert data["weight_increment"] == 2.5
        assert data["muscle_groups"] == ["chest", "triceps"]

    def test_default_rep_range(self, client):
        self.history = workout(0, (60, 9))

        data = client.get(self.url("progression")).json()

        assert data["suggested_min_reps"] == 8
        assert data["suggested_max_reps"] == 12
        assert data["suggested_reps"] == 10

    def test_history_scoping_is_passed_through(self, client):
        template_id = uuid.uuid4()
        workout_id = uuid.uuid4()

        client.get(
            self.url("progression"),
            params={"template_id": str(template_id), "exclude_workout_id": str(workout_id)},
        )

        assert self.loaded_with == {"template_id": template_id, "exclude_workout_id": workout_id}

    def test_bodyweight_is_reps_only(self, client):
        self.exercise = make_exercise(exercise_type="bodyweight", equipment_type=None)
        self.history = [SetRecord(reps=12, user_bodyweight=80, session_id="w0")]

        data = client.get(self.url("progression"), params={"min_reps": 6, "max_reps": 12}).json()

        assert data["rationale"] == "extend_rep_range"
        assert data["suggested_reps"] == 13
        assert data["suggested_weight"] is None


class TestPersonalRecordEndpoint(ProgressionApiBase):
    """Tests for POST /exercises/{id}/personal-records/check"""

    def test_first_set_is_not_a_record(self, client):
        response = client.post(self.url("personal-records/check"), json={"weight": 100, "reps": 5})

        data = response.json()
        assert data["is_heaviest_weight"] is False
        assert data["is_best_1rm"] is False
        assert data["is_volume_record"] is False
        assert data["pr_types"] == []

    def test_tie_then_heavier(self, client):
        self.history = workout(0, (100, 5))

        tie = client.post(self.url("personal-records/check"), json={"weight": 100, "reps": 5}).json()
        heavier = client.post(self.url("personal-records/check"), json={"weight": 105, "reps": 5}).json()

        assert tie["pr_types"] == []
        assert heavier["is_heaviest_weight"] is True
        assert "heaviest_weight" in heavier["pr_types"]

    def test_incomplete_history_is_ignored(self, client):
        self.history = workout(0, (100, 5)) + workout(1, (150, 5), completed=False)

        data = client.post(self.url("personal-records/check"), json={"weight": 110, "reps": 5}).json()

        assert data["is_heaviest_weight"] is True

    def test_weighted_pull_up_compares_effective_weight(self, client):
        """Same belt weight at a heavier bodyweight is a heavier effective load."""
        self.exercise = make_exercise(exercise_type="weighted_bodyweight", equipment_type=None)
        self.history = [SetRecord(weight=20, reps=5, user_bodyweight=75, session_id="w0")]

        data = client.post(
            self.url("personal-records/check"),
            json={"weight": 20, "reps": 5, "user_bodyweight": 80},
        ).json()

        assert data["candidate_weight"] == 100
        assert data["is_heaviest_weight"] is True


class TestProgressAnalysisEndpoint(ProgressionApiBase):
    """Tests for GET /exercises/{id}/progress-analysis"""

    def test_empty_history(self, client):
        data = client.get(self.url("progress-analysis")).json()

        assert data["exercise_name"] == "Bench Press"
        assert data["trend"] == "insufficient_data"
        assert data["ready_for_progression"] is False
        assert data["sessions_analyzed"] == 0

    def test_improving(self, client):
        self.history = workout(0, (100, 5)) + workout(7, (102.5, 5)) + workout(14, (105, 5))

        data = client.get(self.url("progress-analysis")).json()

        assert data["trend"] == "improving"
        assert data["ready_for_progression"] is True
        assert data["current_best"]["weight"] == 105
        assert data["weeks_since_progress"] == 1

    def test_suggestions_use_equipment_increment(self, client):
        self.exercise = make_exercise(equipment_type="dumbbell")
        self.history = workout(0, (30, 5)) + workout(7, (32, 5)) + workout(14, (34, 5))

        data = client.get(self.url("progress-analysis")).json()

        weight = data["suggestions"][0]
        assert weight["kind"] == "weight"
        assert weight["suggested_value"] == 36
        assert weight["confidence"] == "high"

    def test_declining_suggests_deload(self, client):
        self.history = workout(0, (105, 5)) + workout(7, (102.5, 5)) + workout(14, (100, 5))

        data = client.get(self.url("progress-analysis")).json()

        assert data["trend"] == "declining"
        assert [s["kind"] for s in data["suggestions"]] == ["weight", "weight", "reps"]
        deload = next(s for s in data["suggestions"] if s["increase"] < 0)
        assert deload["confidence"] == "high"
        assert deload["suggested_value"] == 85
        assert deload["percentage"] == -15

    def test_bodyweight_gets_no_weight_suggestions(self, client):
        self.exercise = make_exercise(exercise_type="bodyweight", equipment_type=None)
        self.history = [
            SetRecord(reps=reps, user_bodyweight=80, performed_at=START + timedelta(days=day), session_id=f"w{day}")
            for day, reps in [(0, 6), (7, 8), (14, 10)]
        ]

        data = client.get(self.url("progress-analysis")).json()

        assert data["trend"] == "improving"
        assert [s["kind"] for s in data["suggestions"]] == ["reps"]
        assert data["suggestions"][0]["suggested_value"] == 11
