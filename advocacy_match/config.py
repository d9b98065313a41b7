"""
Application configuration management.
"""

from functools import lru_cache
from typing import List

from pydantic import field_validator
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
    app_name: str = "AdvocacyMatch"
    debug: bool = True

    # Database
    database_url: str = "sqlite+aiosqlite:///./advocacy_match.db"

    # API
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Matching
    max_matches: int = 20
    candidate_pool_limit: int = 50
    max_selected_causes: int = 3
    match_mode: str = "substring"  # "substring" or "word_boundary"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            import json
            return json.loads(v)
        return v

    @field_validator("match_mode")
    @classmethod
    def check_match_mode(cls, v: str) -> str:
        v = v.lower()
        if v not in ("substring", "word_boundary"):
            raise ValueError(f"unsupported match_mode: {v}")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
