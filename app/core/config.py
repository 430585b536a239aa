# app/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fallback shown on the admin dashboard while no reviews exist yet
DEFAULT_AVG_RATING = 4.5
DASHBOARD_TOP_LIMIT = 5


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = "sqlite:///./service_booking.db"

    # Shared with the auth service that issues the tokens
    secret_key: str = "dev-secret-key-change-in-production"
    algorithm: str = "HS256"

    log_level: str = "INFO"

    default_avg_rating: float = DEFAULT_AVG_RATING
    # the dashboard never shows more than five entries per list
    dashboard_top_limit: int = Field(DASHBOARD_TOP_LIMIT, ge=1, le=DASHBOARD_TOP_LIMIT)


@lru_cache
def get_settings() -> Settings:
    return Settings()
