"""
Environment configuration for the hotel property management system.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hotelpms.core.constants import ALLOWED_WINDOW_SIZES

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Application configuration
    APP_NAME: str = Field(
        default="Hotel PMS",
        validation_alias=AliasChoices("APP_NAME", "PROJECT_NAME"),
    )
    API_VERSION: str = Field(
        default="v1",
        validation_alias=AliasChoices("API_VERSION", "PROJECT_VERSION"),
    )
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: str = Field(
        default="*",
        validation_alias=AliasChoices("CORS_ORIGINS", "BACKEND_CORS_ORIGINS"),
    )

    # Database configuration
    DATABASE_URL: str = "sqlite+pysqlite:///./hotelpms.db"
    DATABASE_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Reservation timeline layout (pixels)
    CALENDAR_CELL_WIDTH: int = Field(default=48, gt=0)
    CALENDAR_ROW_HEIGHT: int = Field(default=48, gt=0)
    CALENDAR_DRAG_THRESHOLD_PX: float = Field(default=3.0, ge=0)
    CALENDAR_DEFAULT_DAYS: int = 14

    @field_validator('CALENDAR_DEFAULT_DAYS')
    @classmethod
    def validate_default_days(cls, v: int) -> int:
        """Default window must be one of the selectable sizes."""
        if v not in ALLOWED_WINDOW_SIZES:
            raise ValueError(
                f"CALENDAR_DEFAULT_DAYS must be one of {sorted(ALLOWED_WINDOW_SIZES)}"
            )
        return v

    def get_cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from a JSON list or comma separated string"""
        value = self.CORS_ORIGINS.strip()
        if value.startswith('[') and value.endswith(']'):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    def get_database_url(self) -> str:
        """Get the SQLAlchemy database URL"""
        return self.DATABASE_URL

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
