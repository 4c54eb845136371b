"""Plain value objects passed into and out of the calculation services.

None of these own a database row; API and persistence code build them
per request and discard them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class SetRecord:
    """One logged set. `None` means the field was not logged."""

    weight: float | None = None
    reps: int | None = None
    duration_seconds: int | None = None
    distance: float | None = None
    assistance_weight: float | None = None
    user_bodyweight: float | None = None
    completed: bool = True

    # Passthrough metadata (never derived here)
    partial_reps: int | None = None
    rpe: float | None = None
    performed_at: datetime | None = None
    session_id: Any = None


@dataclass(frozen=True)
class RequiredFieldSet:
    """Which measurement fields an exercise type uses."""

    weight: bool = False
    reps: bool = False
    duration: bool = False
    distance: bool = False
    bodyweight: bool = False
    assistance: bool = False

    def as_dict(self) -> dict[str, bool]:
        return {
            "weight": self.weight,
            "reps": self.reps,
            "duration": self.duration,
            "distance": self.distance,
            "bodyweight": self.bodyweight,
            "assistance": self.assistance,
        }


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)


@dataclass
class DerivedSet:
    """Numbers computed from a set's active fields."""

    effective_weight: float
    volume: float
    pace: float | None
    validation: ValidationResult
