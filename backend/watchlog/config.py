"""
Application Configuration

Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # App
    app_name: str = "Watchlog API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./watchlog.db"

    # API
    cors_origins: str = '["http://localhost:1420"]'

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WATCHLOG_",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from JSON string"""
        try:
            return json.loads(self.cors_origins)
        except (json.JSONDecodeError, TypeError):
            return ["http://localhost:1420"]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
