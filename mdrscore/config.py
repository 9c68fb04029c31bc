"""Configuration management using Pydantic Settings."""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Scoring weights are not settings; they live in
    ``mdrscore.scoring.scoring_config``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "MDR Score Engine"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Year that legacy decay is measured against; unset means the current year
    scoring_reference_year: Optional[int] = Field(default=None, ge=1800, le=3000)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
