from datetime import datetime
from typing import List
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings

from src.core.env_manager import EnvManager


class Settings(BaseSettings):
    ASYNC_DATABASE_URL: str = EnvManager.get_env_variable(
        "ASYNC_DATABASE_URL", "sqlite+aiosqlite:///database.db"
    )
    SECRET_KEY: str = EnvManager.get_env_variable("SECRET_KEY", "supersecretkey")
    JWT_ALGORITHM: str = EnvManager.get_env_variable("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        EnvManager.get_env_variable("ACCESS_TOKEN_EXPIRE_MINUTES", "60")
    )

    PROJECT_NAME: str = EnvManager.get_env_variable("PROJECT_NAME", "Posts API")
    PROJECT_INFO: str = EnvManager.get_env_variable(
        "PROJECT_INFO", "Blog posts with authenticated, owner-only edits"
    )
    PROJECT_VERSION: str = EnvManager.get_env_variable("PROJECT_VERSION", "1.0.0")
    TIME_ZONE: str = EnvManager.get_env_variable("TIME_ZONE", "UTC")
    LOG_LEVEL: str = EnvManager.get_env_variable("LOG_LEVEL", "INFO")
    DEFAULT_PAGE_LIMIT: int = int(EnvManager.get_env_variable("DEFAULT_PAGE_LIMIT", "10"))
    CORS_ORIGINS: str = EnvManager.get_env_variable("CORS_ORIGINS", "*")

    def get_cors_origins(self) -> List[str]:
        """Split the comma separated `CORS_ORIGINS` value."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def get_now(self):
        """Get the current time in the configured time zone."""
        tz = ZoneInfo(self.TIME_ZONE)
        return datetime.now(tz)


settings = Settings()
