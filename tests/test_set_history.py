import uuid
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

from app.core.records import SetRecord
from app.services.set_history import (
    increments_from_settings,
    record_for_comparison,
    set_record_from_row,
    with_effective_weight,
)


class TestSetRecordFromRow:
    def test_decimals_become_floats(self):
        workout_id = uuid.uuid4()
        started = datetime(2026, 2, 1, tzinfo=timezone.utc)
        row = SimpleNamespace(
            weight=Decimal("102.50"),
            reps=5,
            duration_seconds=None,
            distance=None,
            assistance_weight=None,
            user_bodyweight=Decimal("80.00"),
            completed=True,
            partial_reps=1,
            rpe=Decimal("8.5"),
            workout_id=workout_id,
        )

        record = set_record_from_row(row, started)

        assert record.weight == 102.5
        assert isinstance(record.weight, float)
        assert record.rpe == 8.5
        assert record.distance is None
        assert record.performed_at == started
        assert record.session_id == workout_id


class TestWithEffectiveWeight:
    """History normalisation for bodyweight-relative exercises."""

    def test_weighted_types_pass_through(self):
        record = SetRecord(weight=100, reps=5)
        assert with_effective_weight("weight_reps", record, 80) is record

    def test_assisted_uses_own_bodyweight(self):
        record = SetRecord(reps=8, assistance_weight=25, user_bodyweight=70)
        result = with_effective_weight("assisted_bodyweight", record, 90)
        assert result.weight == 45
        assert result.reps == 8

    def test_falls_back_to_profile_bodyweight(self):
        record = SetRecord(weight=10, reps=5)
        result = with_effective_weight("weighted_bodyweight", record, 80)
        assert result.weight == 90
        assert result.user_bodyweight == 80

    def test_no_bodyweight_anywhere(self):
        record = SetRecord(reps=12)
        assert with_effective_weight("bodyweight", record, None) is record


class TestIncrementsFromSettings:
    def test_maps_every_column(self, user_settings):
        increments = increments_from_settings(user_settings)
        assert increments.barbell == 2.5
        assert increments.dumbbell == 2.0
        assert increments.kettlebell == 4.0
        assert increments.plate_loaded == 5.0
        assert increments.default_increment == 1.25


class TestRecordForComparison:
    """Only the fields an exercise type uses take part in record checks."""

    def test_duration_drops_weight_and_reps(self):
        record = SetRecord(weight=100, reps=5, duration_seconds=40)
        result = record_for_comparison("duration", record, 80)
        assert result.weight is None
        assert result.reps is None
        assert result.duration_seconds == 40

    def test_weight_distance_keeps_weight_only(self):
        result = record_for_comparison("weight_distance", SetRecord(weight=60, reps=3, distance=20), None)
        assert result.weight == 60
        assert result.reps is None

    def test_bodyweight_ignores_stray_weight(self):
        result = record_for_comparison("bodyweight", SetRecord(weight=25, reps=10, user_bodyweight=70), None)
        assert result.weight == 70
        assert result.reps == 10

    def test_assistance_only_counts_for_assisted(self):
        record = SetRecord(weight=10, reps=5, assistance_weight=30, user_bodyweight=80)
        assert record_for_comparison("weighted_bodyweight", record, None).weight == 90
        assert record_for_comparison("assisted_bodyweight", record, None).weight == 50
