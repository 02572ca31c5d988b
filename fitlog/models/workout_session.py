from __future__ import annotations

import uuid
from datetime import datetime
from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fitlog.core.db import Base


def new_id() -> str:
    return str(uuid.uuid4())


class WorkoutSession(Base):
    __tablename__ = "WorkoutSessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    user_id: Mapped[str] = mapped_column(
        "userId",
        String(255),
        index=True,
        nullable=False,
    )

    title: Mapped[str | None] = mapped_column(Text, nullable=True)  # "Morning Run", "Push Day"

    workout_date: Mapped[datetime] = mapped_column(
        "workoutDate",
        DateTime(timezone=True),
        nullable=False,
    )

    start_time: Mapped[datetime | None] = mapped_column(
        "startTime",
        DateTime(timezone=True),
        nullable=True,
    )

    end_time: Mapped[datetime | None] = mapped_column(
        "endTime",
        DateTime(timezone=True),
        nullable=True,
    )

    workout_type: Mapped[str | None] = mapped_column("workoutType", Text, nullable=True)  # cardio/strength/yoga
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    total_duration_minutes: Mapped[int | None] = mapped_column("totalDurationMinutes", Integer, nullable=True)
    total_calories: Mapped[int | None] = mapped_column("totalCalories", Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=True),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        nullable=False,
    )
