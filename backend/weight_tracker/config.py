"""
Configuration settings for the Weight Tracker backend.
Uses pydantic-settings for type-safe environment variable management.
"""
from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App Info
    app_name: str = "Weight Tracker API"
    app_version: str = "1.0.0"
    git_commit: Optional[str] = None  # Git commit hash from environment
    build_date: Optional[str] = None  # Build timestamp from environment
    debug: bool = False
    environment: str = "development"  # "production" enables secure cookies
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./weight-tracker.db"

    # Security
    secret_key: str
    algorithm: str = "HS256"
    session_cookie_name: str = "session"
    session_expire_days: int = 7

    # CORS - comma-separated list in environment variable
    # Example: CORS_ORIGINS="http://localhost:5173,http://localhost:3000"
    cors_origins_str: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        validation_alias="CORS_ORIGINS"
    )

    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def cookie_secure(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def session_max_age(self) -> int:
        """Session lifetime in seconds."""
        return self.session_expire_days * 24 * 60 * 60

    # Pydantic v2 settings config
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars so unexpected keys don't crash
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Settings instance built from the environment, created on first use."""
    return Settings()
