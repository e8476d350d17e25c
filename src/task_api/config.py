"""Application settings loaded from environment variables and an optional .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Every field can be overridden with a ``TASK_API_`` prefixed environment
    variable, e.g. ``TASK_API_DATABASE_PATH=/var/lib/task-api/tasks.db``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASK_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Task API"
    environment: str = "development"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 7000
    cors_allowed_origins: list[str] = [
        "http://localhost:7000",
        "http://localhost:5173",
    ]

    # Storage
    database_path: Path = Path("tasks.db")

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None

    # Access tokens
    jwt_secret: str = "change-me-in-production-please-32b"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def effective_log_dir(self) -> Path | None:
        """Directory for log files; production logs to ./logs unless configured."""
        if self.log_dir is None and self.is_production:
            return Path("logs")
        return self.log_dir


@lru_cache
def get_settings() -> Settings:
    return Settings()
