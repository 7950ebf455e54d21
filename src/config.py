"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "SofayManta"
    cors_origins: list[str] = [
        "http://localhost:4200",
        "https://sofaymanta-front.vercel.app",
    ]

    # TMDB
    tmdb_access_token: str
    watch_region: str = "ES"

    # Supabase
    supabase_url: str
    supabase_anon_key: str
    supabase_service_key: str

    @field_validator("tmdb_access_token", "supabase_url", "supabase_anon_key", "supabase_service_key")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Reject blank credentials so the app fails at startup, not on first request."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("watch_region")
    @classmethod
    def validate_watch_region(cls, v: str) -> str:
        """Watch region must be a 2-letter ISO country code."""
        if len(v) != 2:
            raise ValueError("WATCH_REGION must be a 2-letter ISO code")
        return v.upper()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
