"""UserSettings model: singleton profile: bodyweight, units, progression increments."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import DEFAULT_KETTLEBELL_INCREMENT, DEFAULT_WEIGHT_INCREMENT
from app.core.enums import PartialRepsVolumeWeight
from app.db.base import Base


class UserSettings(Base):
    """Single row (no auth yet). Increments are per equipment type, in the user's weight unit."""

    __tablename__ = "user_settings"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    current_bodyweight: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_unit: Mapped[str] = mapped_column(String(10), default="kg")
    distance_unit: Mapped[str] = mapped_column(String(10), default="km")
    partial_reps_volume_weight: Mapped[str] = mapped_column(
        String(10), default=PartialRepsVolumeWeight.NONE.value
    )

    barbell_increment: Mapped[float] = mapped_column(Float, default=DEFAULT_WEIGHT_INCREMENT)
    dumbbell_increment: Mapped[float] = mapped_column(Float, default=DEFAULT_WEIGHT_INCREMENT)
    machine_increment: Mapped[float] = mapped_column(Float, default=DEFAULT_WEIGHT_INCREMENT)
    cable_increment: Mapped[float] = mapped_column(Float, default=DEFAULT_WEIGHT_INCREMENT)
    kettlebell_increment: Mapped[float] = mapped_column(Float, default=DEFAULT_KETTLEBELL_INCREMENT)
    plate_loaded_increment: Mapped[float] = mapped_column(Float, default=DEFAULT_WEIGHT_INCREMENT)
    default_increment: Mapped[float] = mapped_column(Float, default=DEFAULT_WEIGHT_INCREMENT)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
