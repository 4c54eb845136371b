"""Per-set calculations driven by the exercise type.

Every function here is total: unknown exercise types, zero distances and
malformed duration strings resolve to 0 / empty results instead of raising.
Callers that must tell "zero" apart from "invalid" run `validate` first.

Units are whatever the caller uses (kg or lbs, km or miles); nothing here
converts between them.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from app.core.enums import ExerciseType
from app.core.records import DerivedSet, RequiredFieldSet, SetRecord, ValidationResult

_REQUIRED_FIELDS: dict[ExerciseType, RequiredFieldSet] = {
    ExerciseType.WEIGHT_REPS: RequiredFieldSet(weight=True, reps=True),
    ExerciseType.DURATION: RequiredFieldSet(duration=True),
    ExerciseType.DURATION_WEIGHT: RequiredFieldSet(duration=True, weight=True),
    ExerciseType.DISTANCE_DURATION: RequiredFieldSet(distance=True, duration=True),
    ExerciseType.WEIGHT_DISTANCE: RequiredFieldSet(weight=True, distance=True),
    ExerciseType.BODYWEIGHT: RequiredFieldSet(bodyweight=True, reps=True),
    ExerciseType.ASSISTED_BODYWEIGHT: RequiredFieldSet(bodyweight=True, reps=True, assistance=True),
    ExerciseType.WEIGHTED_BODYWEIGHT: RequiredFieldSet(bodyweight=True, reps=True, weight=True),
}

_NO_FIELDS = RequiredFieldSet()

# (required flag, candidate key, label) in the order errors are reported.
# Bodyweight is supplied from the user's profile, so it is never checked per set.
_VALIDATED_FIELDS = (
    ("weight", "weight", "Weight"),
    ("reps", "reps", "Reps"),
    ("duration", "duration_seconds", "Duration"),
    ("distance", "distance", "Distance"),
    ("assistance", "assistance_weight", "Assistance weight"),
)

_WEIGHT_UNITS = ["lbs", "kg"]
_DISTANCE_UNITS = ["miles", "km", "feet", "meters"]
_DURATION_UNITS = ["seconds", "minutes"]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def as_exercise_type(value: ExerciseType | str | None) -> ExerciseType | None:
    """Return the enum member for a tag, or None if the tag is unknown."""
    if isinstance(value, ExerciseType):
        return value
    try:
        return ExerciseType(value)
    except ValueError:
        return None


def is_known_exercise_type(value: ExerciseType | str | None) -> bool:
    return as_exercise_type(value) is not None


def required_fields(exercise_type: ExerciseType | str | None) -> RequiredFieldSet:
    """Fields a set of this type uses. Unknown types use nothing."""
    et = as_exercise_type(exercise_type)
    if et is None:
        return _NO_FIELDS
    return _REQUIRED_FIELDS[et]


def effective_weight(
    exercise_type: ExerciseType | str | None,
    user_bodyweight: float = 0,
    external_weight: float = 0,
    assistance_weight: float = 0,
) -> float:
    """
    Load actually moved for one rep.

    Assisted bodyweight is not clamped: assistance heavier than the user
    gives a negative result.
    """
    et = as_exercise_type(exercise_type)
    if et == ExerciseType.BODYWEIGHT:
        return user_bodyweight
    if et == ExerciseType.ASSISTED_BODYWEIGHT:
        return user_bodyweight - assistance_weight
    if et == ExerciseType.WEIGHTED_BODYWEIGHT:
        return user_bodyweight + external_weight
    if et in (
        ExerciseType.WEIGHT_REPS,
        ExerciseType.DURATION_WEIGHT,
        ExerciseType.WEIGHT_DISTANCE,
    ):
        return external_weight
    # Duration and distance exercises have no weight
    return 0


def volume(
    exercise_type: ExerciseType | str | None,
    weight: float = 0,
    reps: float = 0,
    distance: float = 0,
    duration_seconds: float = 0,
    user_bodyweight: float = 0,
    assistance_weight: float = 0,
) -> float:
    """
    Single-set training volume.

    - weight_reps: weight × reps
    - bodyweight variants: effective weight × reps
    - weight_distance: weight × distance
    - duration, duration_weight: seconds (time under tension)
    - distance_duration: distance covered
    """
    et = as_exercise_type(exercise_type)
    if et == ExerciseType.WEIGHT_REPS:
        return weight * reps
    if et in (
        ExerciseType.BODYWEIGHT,
        ExerciseType.ASSISTED_BODYWEIGHT,
        ExerciseType.WEIGHTED_BODYWEIGHT,
    ):
        return effective_weight(et, user_bodyweight, weight, assistance_weight) * reps
    if et == ExerciseType.WEIGHT_DISTANCE:
        return weight * distance
    if et in (ExerciseType.DURATION, ExerciseType.DURATION_WEIGHT):
        return duration_seconds
    if et == ExerciseType.DISTANCE_DURATION:
        return distance
    return 0


def pace(distance: float, duration_seconds: float) -> float:
    """Minutes per unit of distance (lower is faster). 0 when distance <= 0."""
    if distance <= 0:
        return 0
    return (duration_seconds / 60.0) / distance


def validate(exercise_type: ExerciseType | str | None, fields: Mapping[str, Any]) -> ValidationResult:
    """
    Advisory check of the fields this exercise type requires.

    A required field that is missing or <= 0 adds an error. Fields the type
    does not use are never looked at, whatever their value.
    """
    required = required_fields(exercise_type)
    errors: list[str] = []
    for flag, key, label in _VALIDATED_FIELDS:
        if not getattr(required, flag):
            continue
        value = fields.get(key)
        if value is None or value <= 0:
            errors.append(f"{label} is required and must be greater than 0")
    return ValidationResult(is_valid=not errors, errors=errors)


def derive_set(exercise_type: ExerciseType | str | None, record: SetRecord) -> DerivedSet:
    """Effective weight, volume, pace and validation for one set.

    Fields the type does not use are treated as zero even when present.
    """
    req = required_fields(exercise_type)
    weight = float(record.weight or 0) if req.weight else 0.0
    reps = int(record.reps or 0) if req.reps else 0
    duration = int(record.duration_seconds or 0) if req.duration else 0
    distance = float(record.distance or 0) if req.distance else 0.0
    assistance = float(record.assistance_weight or 0) if req.assistance else 0.0
    bodyweight = float(record.user_bodyweight or 0) if req.bodyweight else 0.0

    set_pace = pace(distance, duration) if req.distance and req.duration else None
    validation = validate(
        exercise_type,
        {
            "weight": record.weight,
            "reps": record.reps,
            "duration_seconds": record.duration_seconds,
            "distance": record.distance,
            "assistance_weight": record.assistance_weight,
        },
    )
    return DerivedSet(
        effective_weight=effective_weight(exercise_type, bodyweight, weight, assistance),
        volume=volume(exercise_type, weight, reps, distance, duration, bodyweight, assistance),
        pace=set_pace,
        validation=validation,
    )


def unit_suggestions(exercise_type: ExerciseType | str | None) -> dict[str, list[str]]:
    """Units worth offering for each field of this exercise type."""
    et = as_exercise_type(exercise_type)
    suggestions: dict[str, list[str]] = {}
    if et in (
        ExerciseType.WEIGHT_REPS,
        ExerciseType.DURATION_WEIGHT,
        ExerciseType.WEIGHT_DISTANCE,
        ExerciseType.WEIGHTED_BODYWEIGHT,
    ):
        suggestions["weight"] = list(_WEIGHT_UNITS)
    if et in (ExerciseType.DISTANCE_DURATION, ExerciseType.WEIGHT_DISTANCE):
        suggestions["distance"] = list(_DISTANCE_UNITS)
    if et in (
        ExerciseType.DURATION,
        ExerciseType.DURATION_WEIGHT,
        ExerciseType.DISTANCE_DURATION,
    ):
        suggestions["duration"] = list(_DURATION_UNITS)
    if et == ExerciseType.ASSISTED_BODYWEIGHT:
        suggestions["assistance"] = list(_WEIGHT_UNITS)
    return suggestions


# ---- Duration / pace formatting ----


def format_duration(seconds: int) -> str:
    """Seconds to "M:SS" (minutes are not wrapped into hours)."""
    total = int(seconds)
    minutes, remaining = divmod(total, 60)
    return f"{minutes}:{remaining:02d}"


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_duration(value: str) -> int:
    """
    "M:SS" to seconds. Anything without exactly one colon gives 0, as does a
    side with no leading digits, so 0 can also mean "could not parse".
    """
    parts = value.split(":")
    if len(parts) != 2:
        return 0
    return _leading_int(parts[0]) * 60 + _leading_int(parts[1])


def format_pace(pace_minutes_per_unit: float, unit: str = "miles") -> str:
    """Minutes per unit to "M:SS /mi" (or "/km")."""
    minutes = math.floor(pace_minutes_per_unit)
    # Half-up rounding; 59.5s and above carries into the next minute
    seconds = math.floor((pace_minutes_per_unit - minutes) * 60 + 0.5)
    if seconds >= 60:
        minutes += 1
        seconds -= 60
    suffix = "mi" if unit == "miles" else "km"
    return f"{minutes}:{seconds:02d} /{suffix}"
