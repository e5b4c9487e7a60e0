"""
Application settings using Pydantic.

Provides environment-based configuration loading with SNOWFLOW_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False

    # HTTP client settings
    http_timeout: float = 30.0
    user_agent: str = "snowflow/0.1.0"

    # CLI connection contexts file (defaults to ~/.snowflow/config.yaml)
    config_path: str | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "SNOWFLOW_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
