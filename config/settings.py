"""
Configuration management for the session assignment API.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Application
    app_name: str = "Session Assignment API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # Assignment engine (0 disables the limit)
    batch_deadline_seconds: float = 0
    collaborator_timeout_seconds: float = 10
    empty_batch_success_rate: str = "0%"

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]


settings = Settings()
