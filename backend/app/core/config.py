"""
Configuration settings for the Equipment Monitoring Backend.

This module handles application configuration using Pydantic settings.
"""

from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Equipment Monitoring Backend"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Database Configuration
    database_url: str = "sqlite+aiosqlite:///./equipment_monitoring.db"
    db_echo: bool = False
    db_pool_size: int = 20
    db_max_overflow: int = 10
    db_timeout_seconds: float = 30.0
    seed_default_users: bool = True

    # Security Configuration (JWT)
    secret_key: str = "your-secret-key-change-this-in-production-min-32-chars"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60

    # Audio attachments
    upload_dir: str = "uploads"
    max_upload_bytes: int = 10 * 1024 * 1024

    class Config:
        env_file = ".env"
        case_sensitive = False


def get_settings() -> Settings:
    """Load settings from the environment and the optional .env file."""
    return Settings()
