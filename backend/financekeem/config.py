"""
Application configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Database (empty = local JSON store)
    DATABASE_URL: Optional[str] = None
    LOCAL_STORE_PATH: str = "data/financekeem_data.json"

    # Security
    SECRET_KEY: str = "local-development-secret-key-change-in-production"

    # Admin panel
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "financekeem"

    # Telegram: owner chat gets bookings/submissions, dev chat gets failures
    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_ADMIN_CHAT_ID: Optional[str] = None
    TELEGRAM_DEV_CHAT_ID: Optional[str] = None

    # Application
    SITE_URL: str = "http://localhost:8000"
    LOG_LEVEL: str = "INFO"

    # Development
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    class Config:
        env_file = Path(__file__).resolve().parent.parent.parent / ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Cached application settings"""
    return Settings()
