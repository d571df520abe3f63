"""Application configuration management."""

from typing import Literal

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./jobtracker.db"
    storage_backend: Literal["sql", "memory"] = "sql"

    # Listing
    page_size: int = Field(default=10, ge=1, le=100)

    # Input limits
    note_max_length: int = Field(default=2000, ge=1)
    notes_max_length: int = Field(default=5000, ge=1)
    search_max_length: int = Field(default=100, ge=1)

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level for the service",
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
