from __future__ import annotations

from datetime import datetime
from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fitlog.core.db import Base
from fitlog.models.workout_session import new_id


class WorkoutExercise(Base):
    __tablename__ = "WorkoutExercises"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    session_id: Mapped[str] = mapped_column(
        "sessionId",
        String(36),
        ForeignKey("WorkoutSessions.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column("userId", String(255), index=True, nullable=False)

    name: Mapped[str] = mapped_column(Text, nullable=False)  # e.g. Bench Press, Running
    category: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Strength
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps_per_set: Mapped[int | None] = mapped_column("repsPerSet", Integer, nullable=True)
    weight_per_rep: Mapped[float | None] = mapped_column("weightPerRep", Float, nullable=True)  # kg

    # Cardio
    distance_km: Mapped[float | None] = mapped_column("distanceKm", Float, nullable=True)
    duration_minutes: Mapped[float | None] = mapped_column("durationMinutes", Float, nullable=True)

    calories_burned: Mapped[float | None] = mapped_column("caloriesBurned", Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), nullable=False
    )
