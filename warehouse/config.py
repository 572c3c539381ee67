from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Warehouse Inventory API"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./warehouse.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security
    # ==============================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None
    AUTH_USERNAME: Optional[str] = None
    AUTH_PASSWORD: Optional[str] = None
    AUTH_PASSWORD_HASH: Optional[str] = None
    AUTH_PASSWORD_SALT: Optional[str] = None
    AUTH_PBKDF2_ROUNDS: int = 200_000

    # ==============================
    # Pagination
    # ==============================
    PAGE_DEFAULT_LIMIT: int = 10
    PAGE_MAX_LIMIT: int = 100

    # ==============================
    # Stock movements
    # ==============================
    MOVEMENT_CONFLICT_RETRIES: int = 3


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
