"""Application configuration via environment variables."""

import json
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Record store: both identifiers MUST be set and non-blank (no default)
    RECORD_STORE_PROJECT_ID: str = Field(..., min_length=1)
    RECORD_STORE_PUBLIC_KEY: str = Field(..., min_length=1)
    RECORD_STORE_BACKEND: Literal["sql", "http"] = "sql"
    RECORD_STORE_URL: str = "https://api.apper.io/v1"
    RECORD_STORE_TIMEOUT_SECONDS: float = 15.0

    # Database (SQL record store + persisted preferences)
    DATABASE_URL: str = "sqlite+aiosqlite:///./staffsphere.db"

    # Auth: identity tokens issued by the auth provider
    JWT_SECRET: str = Field(..., min_length=1)
    JWT_ALGORITHM: str = "HS256"

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: str = '["http://localhost:5173"]'
    DEFAULT_DARK_MODE: bool = False
    DASHBOARD_ACTIVITY_LIMIT: int = 10

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS JSON string into a list."""
        try:
            return json.loads(self.CORS_ORIGINS)
        except (json.JSONDecodeError, TypeError):
            return ["http://localhost:5173"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
