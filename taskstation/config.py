"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    app_name: str = "Task Station API"
    log_level: str = "INFO"

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8080",
    ]

    # Database
    database_url: str = "sqlite+aiosqlite:///./taskstation.db"

    @property
    def async_database_url(self) -> str:
        """Get database URL with an async driver for SQLAlchemy.

        Cloud providers use 'postgres://' but SQLAlchemy async needs 'postgresql+asyncpg://'.
        """
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # File storage (S3 / LocalStack). When disabled, files are stored inline.
    s3_enabled: bool = False
    s3_bucket_name: str = "task-station-files"
    s3_service_url: str = "http://localhost:4566"
    s3_region: str = "us-east-1"
    s3_access_key_id: str = "test"
    s3_secret_access_key: str = "test"
    s3_force_path_style: bool = True

    # Periodic PENDING -> OVERDUE sweep, 0 disables it
    overdue_sweep_interval_minutes: int = 0

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
