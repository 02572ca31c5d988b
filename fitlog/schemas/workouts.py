from datetime import datetime, timezone
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def _as_utc(value: datetime) -> datetime:
    # SQLite returns stored UTC values without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayloadIn(CamelModel):
    """Request body base: optional fields may be omitted but never sent as null."""

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("*", mode="after")
    @classmethod
    def normalize_datetimes(cls, value):
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value


# --- Sessions ---

class SessionFieldsIn(PayloadIn):
    title: str | None = Field(default=None, min_length=1)
    workout_date: datetime | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    workout_type: str | None = Field(default=None, min_length=1)
    notes: str | None = None
    total_duration_minutes: StrictInt | None = Field(default=None, gt=0)
    total_calories: StrictInt | None = Field(default=None, ge=0)


class SessionCreateIn(SessionFieldsIn):
    pass


class SessionUpdateIn(SessionFieldsIn):
    """Fields left out of the request keep their stored values."""


class SessionOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    user_id: str
    title: str | None = None
    workout_date: UtcDatetime
    start_time: UtcDatetime | None = None
    end_time: UtcDatetime | None = None
    workout_type: str | None = None
    notes: str | None = None
    total_duration_minutes: int | None = None
    total_calories: int | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


# --- Exercises ---

class ExerciseUpsertIn(PayloadIn):
    id: str | None = None  # empty string inserts, same as omitting it
    session_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: str | None = None

    sets: StrictInt | None = Field(default=None, gt=0)
    reps_per_set: StrictInt | None = Field(default=None, gt=0)
    weight_per_rep: StrictFloat | None = Field(default=None, gt=0)

    distance_km: StrictFloat | None = Field(default=None, gt=0)
    duration_minutes: StrictFloat | None = Field(default=None, gt=0)

    calories_burned: StrictFloat | None = Field(default=None, ge=0)
    notes: str | None = None


class ExerciseOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    session_id: str
    user_id: str
    name: str
    category: str | None = None
    sets: int | None = None
    reps_per_set: int | None = None
    weight_per_rep: float | None = None
    distance_km: float | None = None
    duration_minutes: float | None = None
    calories_burned: float | None = None
    notes: str | None = None
    created_at: UtcDatetime


# --- Envelopes ---

class SessionData(CamelModel):
    session: SessionOut


class SessionPage(CamelModel):
    items: list[SessionOut]
    total: int  # items on this page, not the full row count
    page: int
    page_size: int


class SessionWithExercises(CamelModel):
    session: SessionOut
    exercises: list[ExerciseOut]


class ExerciseData(CamelModel):
    exercise: ExerciseOut


class DeletedData(CamelModel):
    id: str


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T
