from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitlog.core.config import settings
from fitlog.core.errors import register_exception_handlers
from fitlog.core.logging import setup_logger
from fitlog.routers.workouts import router as workouts_router

setup_logger(level=settings.LOG_LEVEL)

app = FastAPI(title="Fitlog API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(workouts_router)


@app.get("/health")
def health():
    return {"ok": True}
