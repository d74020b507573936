"""Configuration management using pydantic-settings."""
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini credential (read from API_KEY)
    api_key: Optional[str] = None

    # Model used for match analysis
    gemini_model: str = "gemini-3-flash-preview"

    # Preference storage (favorites + recent searches)
    database_url: str = "sqlite:///./goalmind.db"

    # Recent searches kept in history
    max_recent_searches: int = 5

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
