import pytest

from app.core.enums import ExerciseType
from app.core.records import SetRecord
from app.services.exercise_calculations import (
    derive_set,
    effective_weight,
    format_duration,
    format_pace,
    is_known_exercise_type,
    pace,
    parse_duration,
    required_fields,
    unit_suggestions,
    validate,
    volume,
)


class TestRequiredFields:
    """Which inputs each exercise type uses."""

    def test_weight_reps(self):
        req = required_fields("weight_reps")
        assert req.weight and req.reps
        assert not (req.duration or req.distance or req.bodyweight or req.assistance)

    def test_assisted_bodyweight(self):
        req = required_fields(ExerciseType.ASSISTED_BODYWEIGHT)
        assert req.as_dict() == {
            "weight": False,
            "reps": True,
            "duration": False,
            "distance": False,
            "bodyweight": True,
            "assistance": True,
        }

    def test_distance_duration(self):
        req = required_fields("distance_duration")
        assert req.distance and req.duration
        assert not req.weight

    def test_every_type_has_an_entry(self):
        for et in ExerciseType:
            assert any(required_fields(et).as_dict().values())

    def test_unknown_type_uses_nothing(self):
        assert not any(required_fields("yoga").as_dict().values())
        assert not is_known_exercise_type("yoga")
        assert not is_known_exercise_type(None)


class TestEffectiveWeight:
    """Load per rep, by exercise type."""

    @pytest.mark.parametrize("bw,ew", [(0, 0), (80, 20), (72.5, 2.5)])
    def test_weighted_bodyweight_adds(self, bw, ew):
        assert effective_weight("weighted_bodyweight", bw, ew, 0) == bw + ew

    @pytest.mark.parametrize("bw,aw", [(80, 30), (80, 0), (50, 70)])
    def test_assisted_bodyweight_subtracts(self, bw, aw):
        assert effective_weight("assisted_bodyweight", bw, 0, aw) == bw - aw

    def test_over_assisted_is_negative(self):
        """No clamping: more assistance than bodyweight gives a negative load."""
        assert effective_weight("assisted_bodyweight", 60, 0, 80) == -20

    def test_bodyweight_ignores_external_weight(self):
        assert effective_weight("bodyweight", 75, 20, 10) == 75

    def test_weighted_types_use_external_weight(self):
        assert effective_weight("weight_reps", 80, 100) == 100
        assert effective_weight("weight_distance", 80, 40) == 40

    def test_duration_and_unknown_are_zero(self):
        assert effective_weight("duration", 80, 100) == 0
        assert effective_weight("not_a_type", 80, 100, 10) == 0


class TestVolume:
    """Single-set volume per exercise type."""

    @pytest.mark.parametrize("w,r", [(0, 0), (100, 5), (22.5, 12)])
    def test_weight_reps_is_product(self, w, r):
        assert volume("weight_reps", w, r) == w * r

    @pytest.mark.parametrize(
        "et", ["bodyweight", "assisted_bodyweight", "weighted_bodyweight"]
    )
    def test_bodyweight_types_use_effective_weight(self, et):
        expected = effective_weight(et, 80, 10, 20) * 8
        assert volume(et, weight=10, reps=8, user_bodyweight=80, assistance_weight=20) == expected

    def test_weight_distance(self):
        assert volume("weight_distance", weight=40, distance=50) == 2000

    def test_duration_types_return_seconds(self):
        assert volume("duration", duration_seconds=60) == 60
        assert volume("duration_weight", weight=20, duration_seconds=45) == 45

    def test_distance_duration_returns_distance(self):
        assert volume("distance_duration", distance=5, duration_seconds=1500) == 5

    def test_unknown_type_is_zero(self):
        assert volume("zumba", 100, 10, 5, 60, 80, 0) == 0


class TestPace:
    def test_minutes_per_unit(self):
        assert pace(5, 1500) == 5.0

    @pytest.mark.parametrize("distance", [0, -1, -3.5])
    def test_non_positive_distance_is_zero(self, distance):
        assert pace(distance, 1200) == 0


class TestValidate:
    """Advisory validation of required fields."""

    def test_weight_reps_zero_weight_is_invalid(self):
        result = validate("weight_reps", {"weight": 0, "reps": 5})
        assert not result.is_valid
        assert result.errors == ["Weight is required and must be greater than 0"]

    def test_duration_ignores_weight(self):
        result = validate("duration", {"weight": 0, "duration_seconds": 30})
        assert result.is_valid
        assert result.errors == []

    def test_missing_fields_are_reported_in_order(self):
        result = validate("assisted_bodyweight", {})
        assert result.errors == [
            "Reps is required and must be greater than 0",
            "Assistance weight is required and must be greater than 0",
        ]

    def test_distance_duration(self):
        result = validate("distance_duration", {"distance": -1, "duration_seconds": 600})
        assert result.errors == ["Distance is required and must be greater than 0"]

    def test_unknown_type_is_valid(self):
        assert validate("mystery", {}).is_valid


class TestDeriveSet:
    """Derived numbers for a whole set."""

    def test_weight_reps(self):
        derived = derive_set("weight_reps", SetRecord(weight=100, reps=5))
        assert derived.effective_weight == 100
        assert derived.volume == 500
        assert derived.pace is None
        assert derived.validation.is_valid

    def test_inactive_fields_are_ignored(self):
        derived = derive_set("duration", SetRecord(weight=50, reps=10, duration_seconds=90))
        assert derived.effective_weight == 0
        assert derived.volume == 90

    def test_run_has_pace(self):
        derived = derive_set("distance_duration", SetRecord(distance=5, duration_seconds=1500))
        assert derived.pace == 5.0
        assert derived.volume == 5

    def test_assisted_pull_up(self):
        record = SetRecord(reps=8, assistance_weight=20, user_bodyweight=80)
        derived = derive_set("assisted_bodyweight", record)
        assert derived.effective_weight == 60
        assert derived.volume == 480

    def test_invalid_set_still_derives(self):
        derived = derive_set("weight_reps", SetRecord(weight=0, reps=5))
        assert derived.volume == 0
        assert not derived.validation.is_valid


class TestUnitSuggestions:
    def test_weight_distance(self):
        units = unit_suggestions("weight_distance")
        assert units["weight"] == ["lbs", "kg"]
        assert "meters" in units["distance"]
        assert "duration" not in units

    def test_bodyweight_has_none(self):
        assert unit_suggestions("bodyweight") == {}


class TestDurationFormatting:
    """M:SS formatting and parsing."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "0:00"), (5, "0:05"), (65, "1:05"), (600, "10:00"), (3725, "62:05")],
    )
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize("seconds", [0, 1, 59, 60, 61, 599, 3600, 3661, 86399])
    def test_parse_inverts_format(self, seconds):
        assert parse_duration(format_duration(seconds)) == seconds

    @pytest.mark.parametrize("value", ["", "90", "1:2:3", "abc"])
    def test_malformed_is_zero(self, value):
        assert parse_duration(value) == 0

    def test_non_numeric_side_counts_as_zero(self):
        assert parse_duration("x:30") == 30
        assert parse_duration("2:xx") == 120

    def test_unpadded_seconds(self):
        assert parse_duration("1:5") == 65


class TestFormatPace:
    def test_miles(self):
        assert format_pace(8.5) == "8:30 /mi"

    def test_km(self):
        assert format_pace(5.25, "km") == "5:15 /km"

    def test_rounding_carries_into_next_minute(self):
        assert format_pace(7.9999) == "8:00 /mi"
