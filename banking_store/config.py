"""
Configuration settings for the banking customer store.

Uses Pydantic Settings to load environment variables for the database
connection, the connection pool knobs, logging, and the optional statement
template override file.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("banking", alias="DB_NAME")

    # Connection pool
    pool_max_size: int = Field(10, alias="POOL_MAX_SIZE", ge=1)
    pool_min_size: int = Field(1, alias="POOL_MIN_SIZE", ge=0)
    pool_timeout: float = Field(30.0, alias="POOL_TIMEOUT", gt=0)
    pool_max_idle: float = Field(600.0, alias="POOL_MAX_IDLE", gt=0)
    pool_max_lifetime: float = Field(1800.0, alias="POOL_MAX_LIFETIME", gt=0)

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")
    statements_file: Optional[Path] = Field(None, alias="STATEMENTS_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
