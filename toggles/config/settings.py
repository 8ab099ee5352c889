"""
Centralized configuration using Pydantic BaseSettings.
All environment variables are loaded here - no hardcoded values.
"""
from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Toggles Feature Flag API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: Optional[str] = None  # unset: DEBUG in debug mode, else INFO

    # Evaluation Cache
    EVALUATION_CACHE_ENABLED: bool = True
    EVALUATION_CACHE_TTL_SEC: int = 300  # 5 minutes

    # Expired flags: unset means expiration is not enforced
    EXPIRED_FLAG_POLICY: Optional[Literal["defer", "disable", "enable"]] = None

    # Flag Store
    FLAG_SEED_FILE: Optional[str] = None  # JSON list of flag records

    # Telemetry
    ENABLE_OTEL: bool = False  # Default to False to prevent gRPC errors in dev
    ENABLE_PROMETHEUS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - singleton pattern."""
    return Settings()
