"""
Application settings, read from environment variables (prefix CHESS_RULES_) or a local .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the ambient parts of the application. The rules themselves are not configurable."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_rotation: str = "10 MB"
    log_retention: str = "1 week"

    model_config = SettingsConfigDict(
        env_prefix="CHESS_RULES_", env_file=".env", env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
