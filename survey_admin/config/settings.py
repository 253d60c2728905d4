"""Environment configuration management for the survey admin console."""

from pydantic_settings import BaseSettings
from typing import Optional
import logging

class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Server configuration
    APP_NAME: str = "Survey Admin Console"
    APP_VERSION: str = "1.0.0"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Survey backend
    API_URL: str = "http://localhost:5000/api"
    REQUEST_TIMEOUT: float = 10.0

    # Routing destinations
    LOGIN_ROUTE: str = "/admin/login"
    DASHBOARD_ROUTE: str = "/admin/dashboard"

    # Viewer sessions
    SESSION_COOKIE_NAME: str = "survey_admin_session"
    SESSION_COOKIE_SECURE: bool = False
    MAX_SESSIONS: int = 100

    # Data browser
    DEFAULT_PAGE_SIZE: int = 10
    PAGE_WINDOW_SIZE: int = 5

    # CORS settings
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: list[str] = ["*"]
    CORS_HEADERS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Allow extra env vars without error

# Global settings instance
settings = Settings()

def get_cors_config() -> dict:
    """Get CORS configuration."""
    return {
        "allow_origins": settings.CORS_ORIGINS,
        "allow_credentials": settings.CORS_CREDENTIALS,
        "allow_methods": settings.CORS_METHODS,
        "allow_headers": settings.CORS_HEADERS,
    }

def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
    )
