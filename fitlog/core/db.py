from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from fitlog.core.config import settings


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    eng = create_async_engine(url, echo=echo)
    if eng.dialect.name == "sqlite":
        # SQLite leaves FK enforcement off per connection
        event.listen(eng.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return eng


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with SessionLocal() as session:
        yield session


async def init_models(eng: AsyncEngine = engine) -> None:
    """Create all tables directly from the model metadata (tests, local bootstrap)."""
    import fitlog.models.workout_exercise  # noqa: F401
    import fitlog.models.workout_session  # noqa: F401

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
