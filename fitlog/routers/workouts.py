from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitlog.core.db import get_db
from fitlog.core.deps import get_current_user_id
from fitlog.schemas.workouts import (
    DeletedData,
    Envelope,
    ExerciseData,
    ExerciseOut,
    ExerciseUpsertIn,
    SessionCreateIn,
    SessionData,
    SessionOut,
    SessionPage,
    SessionUpdateIn,
    SessionWithExercises,
)
from fitlog.stores import exercises as exercise_store
from fitlog.stores import sessions as session_store

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.post("/sessions", response_model=Envelope[SessionData], status_code=201)
async def create_session(
    payload: SessionCreateIn,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    session = await session_store.create_session(db, user_id, payload)
    return Envelope(data=SessionData(session=SessionOut.model_validate(session)))


@router.patch("/sessions/{session_id}", response_model=Envelope[SessionData])
async def update_session(
    session_id: str,
    payload: SessionUpdateIn,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    session = await session_store.update_session(db, user_id, session_id, payload)
    return Envelope(data=SessionData(session=SessionOut.model_validate(session)))


@router.delete("/sessions/{session_id}", response_model=Envelope[DeletedData])
async def delete_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await session_store.delete_session(db, user_id, session_id)
    return Envelope(data=DeletedData(id=deleted_id))


@router.get("/sessions", response_model=Envelope[SessionPage])
async def list_sessions(
    page: int = Query(1, ge=1),
    page_size: int = Query(
        session_store.DEFAULT_PAGE_SIZE, ge=1, le=session_store.MAX_PAGE_SIZE, alias="pageSize"
    ),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    sessions = await session_store.list_sessions(db, user_id, page=page, page_size=page_size)
    return Envelope(
        data=SessionPage(
            items=[SessionOut.model_validate(s) for s in sessions],
            total=len(sessions),
            page=page,
            page_size=page_size,
        )
    )


@router.get("/sessions/{session_id}", response_model=Envelope[SessionWithExercises])
async def get_session_with_exercises(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    session, exercises = await session_store.get_session_with_exercises(db, user_id, session_id)
    return Envelope(
        data=SessionWithExercises(
            session=SessionOut.model_validate(session),
            exercises=[ExerciseOut.model_validate(e) for e in exercises],
        )
    )


@router.post("/exercises", response_model=Envelope[ExerciseData])
async def upsert_exercise(
    payload: ExerciseUpsertIn,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    exercise, created = await exercise_store.upsert_exercise(db, user_id, payload)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return Envelope(data=ExerciseData(exercise=ExerciseOut.model_validate(exercise)))


@router.delete("/exercises/{exercise_id}", response_model=Envelope[DeletedData])
async def delete_exercise(
    exercise_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    deleted_id = await exercise_store.delete_exercise(db, user_id, exercise_id)
    return Envelope(data=DeletedData(id=deleted_id))
