from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite+aiosqlite:///./dev.db"
    SQL_ECHO: bool = False
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    JWT_AUDIENCE: str | None = None
    ACCESS_TOKEN_MINUTES: int = 15
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL: str = "INFO"

settings = Settings()
