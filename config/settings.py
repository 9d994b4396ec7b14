"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import List, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Backend credentials should be stored in the .env file. A missing
    database_url never stops the API from starting: requests that need
    the relational backend answer 500 instead.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server settings
    host: str = "0.0.0.0"
    port: int = 1337
    cors_origins: List[str] = ["*"]

    # Storage backend: "memory" keeps everything in-process (non-production),
    # "database" uses the relational backend configured below
    storage_backend: Literal["memory", "database"] = "memory"
    seed_demo_data: bool = False

    # Database settings
    database_url: Optional[str] = None
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_pool_timeout: int = 30
    database_pool_recycle: int = 1800
    database_echo: bool = False  # Set to True for SQL query logging
    database_create_tables: bool = False

    # Listing images referenced by "imagenes" paths (/uploads/...); served
    # only when the directory exists
    uploads_dir: str = "uploads"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"
    app_version: str = "2.0.0"
    debug: bool = False


# Singleton instance
settings = Settings()
