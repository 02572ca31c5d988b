from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitlog.core.errors import NotFoundError
from fitlog.models.workout_exercise import WorkoutExercise
from fitlog.models.workout_session import new_id
from fitlog.schemas.workouts import ExerciseUpsertIn
from fitlog.stores.sessions import get_session_for_user

# Optional columns applied on update only when present in the request;
# session_id and name are always overwritten.
EXERCISE_FIELDS = (
    "category",
    "sets",
    "reps_per_set",
    "weight_per_rep",
    "distance_km",
    "duration_minutes",
    "calories_burned",
    "notes",
)


async def get_exercise_for_user(db: AsyncSession, exercise_id: str, user_id: str) -> WorkoutExercise:
    res = await db.execute(
        select(WorkoutExercise).where(
            WorkoutExercise.id == exercise_id,
            WorkoutExercise.user_id == user_id,
        )
    )
    exercise = res.scalar_one_or_none()
    if not exercise:
        logger.info(f"Workout exercise {exercise_id} not found for user {user_id}")
        raise NotFoundError("Workout exercise not found.")
    return exercise


async def upsert_exercise(
    db: AsyncSession, user_id: str, payload: ExerciseUpsertIn
) -> tuple[WorkoutExercise, bool]:
    """Update the exercise named by ``payload.id`` or insert a new one.

    Returns the exercise and whether it was created.
    """
    await get_session_for_user(db, payload.session_id, user_id)

    if payload.id:
        exercise = await get_exercise_for_user(db, payload.id, user_id)

        data = payload.model_dump(exclude_unset=True)
        exercise.session_id = payload.session_id
        exercise.name = payload.name
        for field in EXERCISE_FIELDS:
            if field in data:
                setattr(exercise, field, data[field])

        await db.commit()
        await db.refresh(exercise)

        logger.debug(f"Updated workout exercise {exercise.id}: fields={sorted(data)}")
        return exercise, False

    exercise = WorkoutExercise(
        id=new_id(),
        session_id=payload.session_id,
        user_id=user_id,
        name=payload.name,
        category=payload.category,
        sets=payload.sets,
        reps_per_set=payload.reps_per_set,
        weight_per_rep=payload.weight_per_rep,
        distance_km=payload.distance_km,
        duration_minutes=payload.duration_minutes,
        calories_burned=payload.calories_burned,
        notes=payload.notes,
        created_at=datetime.now(timezone.utc),
    )
    db.add(exercise)
    await db.commit()
    await db.refresh(exercise)

    logger.info(f"Created workout exercise {exercise.id} in session {exercise.session_id}")
    return exercise, True


async def delete_exercise(db: AsyncSession, user_id: str, exercise_id: str) -> str:
    await get_exercise_for_user(db, exercise_id, user_id)

    await db.execute(
        delete(WorkoutExercise).where(
            WorkoutExercise.id == exercise_id,
            WorkoutExercise.user_id == user_id,
        )
    )
    await db.commit()

    logger.info(f"Deleted workout exercise {exercise_id} for user {user_id}")
    return exercise_id
