"""
Configuration and settings for the storefront backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    port: int = Field(default=3000)

    # Database (Postgres expected, any SQLAlchemy URL works)
    database_url: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    # Sessions (Redis, falls back to process memory)
    redis_url: Optional[str] = Field(default=None)
    session_key_prefix: str = Field(default="storefront:sess:")
    session_cookie_name: str = Field(default="storefront.sid")
    session_max_age_seconds: int = Field(default=24 * 60 * 60, ge=60)
    cookie_secure: bool = Field(default=False)

    cors_origins: list[str] = Field(default=["http://localhost:5173"])

    # Static pages and uploaded product images
    frontend_dir: str = Field(default="frontend")
    uploads_dir: str = Field(default="frontend/uploads")
    max_upload_bytes: int = Field(default=2 * 1024 * 1024)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
