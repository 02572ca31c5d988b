"""Session store: per-user CRUD over ``WorkoutSessions``.

Every lookup filters on both the session id and the caller's user id, so a
session owned by someone else is indistinguishable from a missing one.
"""

from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitlog.core.errors import NotFoundError
from fitlog.models.workout_exercise import WorkoutExercise
from fitlog.models.workout_session import WorkoutSession, new_id
from fitlog.schemas.workouts import SessionCreateIn, SessionUpdateIn

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Columns a caller may overwrite through update_session
SESSION_FIELDS = (
    "title",
    "workout_date",
    "start_time",
    "end_time",
    "workout_type",
    "notes",
    "total_duration_minutes",
    "total_calories",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def get_session_for_user(db: AsyncSession, session_id: str, user_id: str) -> WorkoutSession:
    res = await db.execute(
        select(WorkoutSession).where(
            WorkoutSession.id == session_id,
            WorkoutSession.user_id == user_id,
        )
    )
    session = res.scalar_one_or_none()
    if not session:
        logger.info(f"Workout session {session_id} not found for user {user_id}")
        raise NotFoundError("Workout session not found.")
    return session


async def create_session(db: AsyncSession, user_id: str, payload: SessionCreateIn) -> WorkoutSession:
    now = _now()
    session = WorkoutSession(
        id=new_id(),
        user_id=user_id,
        title=payload.title,
        workout_date=payload.workout_date or now,
        start_time=payload.start_time,
        end_time=payload.end_time,
        workout_type=payload.workout_type,
        notes=payload.notes,
        total_duration_minutes=payload.total_duration_minutes,
        total_calories=payload.total_calories,
        created_at=now,
        updated_at=now,
    )
    db.add(session)
    await db.commit()
    await db.refresh(session)

    logger.info(f"Created workout session {session.id} for user {user_id}")
    return session


async def update_session(
    db: AsyncSession, user_id: str, session_id: str, payload: SessionUpdateIn
) -> WorkoutSession:
    session = await get_session_for_user(db, session_id, user_id)

    data = payload.model_dump(exclude_unset=True)
    for field in SESSION_FIELDS:
        if field in data:
            setattr(session, field, data[field])
    session.updated_at = _now()

    await db.commit()
    await db.refresh(session)

    logger.debug(f"Updated workout session {session_id}: fields={sorted(data)}")
    return session


async def delete_session(db: AsyncSession, user_id: str, session_id: str) -> str:
    """Delete a session and the caller's exercises under it in one transaction."""
    await get_session_for_user(db, session_id, user_id)

    res = await db.execute(
        delete(WorkoutExercise).where(
            WorkoutExercise.session_id == session_id,
            WorkoutExercise.user_id == user_id,
        )
    )
    await db.execute(
        delete(WorkoutSession).where(
            WorkoutSession.id == session_id,
            WorkoutSession.user_id == user_id,
        )
    )
    await db.commit()

    logger.info(f"Deleted workout session {session_id} and {res.rowcount} exercises for user {user_id}")
    return session_id


async def list_sessions(
    db: AsyncSession, user_id: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> list[WorkoutSession]:
    offset = (page - 1) * page_size
    res = await db.execute(
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .order_by(
            WorkoutSession.workout_date.desc(),
            WorkoutSession.created_at.desc(),
            WorkoutSession.id.asc(),
        )
        .limit(page_size)
        .offset(offset)
    )
    return list(res.scalars().all())


async def get_session_with_exercises(
    db: AsyncSession, user_id: str, session_id: str
) -> tuple[WorkoutSession, list[WorkoutExercise]]:
    session = await get_session_for_user(db, session_id, user_id)

    ex_res = await db.execute(
        select(WorkoutExercise)
        .where(
            WorkoutExercise.session_id == session_id,
            WorkoutExercise.user_id == user_id,
        )
        .order_by(WorkoutExercise.created_at.asc(), WorkoutExercise.id.asc())
    )
    return session, list(ex_res.scalars().all())
