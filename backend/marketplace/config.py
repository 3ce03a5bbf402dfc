"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # MongoDB
    mongo_uri: str = "mongodb://mongodb:27017"
    database_name: str = "marketplace_db"
    system_database_name: str = "system_db"

    # Session cookie
    session_secret_key: str = "CHANGE_ME_IN_PRODUCTION_USE_STRONG_SECRET"
    session_cookie_name: str = "session"
    session_max_age_seconds: int = 14 * 24 * 60 * 60
    session_https_only: bool = False

    # Password hashing (bcrypt cost factor)
    bcrypt_rounds: int = 10

    # Guard redirect targets
    login_path: str = "/login"
    dashboard_path: str = "/dashboard"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
