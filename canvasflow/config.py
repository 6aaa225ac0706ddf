"""
Configuration management for CanvasFlow Pro
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "CanvasFlow Pro"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = ""  # overrides the DEBUG-derived level, e.g. "WARNING"

    # Database
    DATABASE_URL: str = "sqlite:///./canvasflow.db"

    # Board owner (no login flow; every request acts as this user)
    DEFAULT_USER_EMAIL: str = "owner@canvasflow.local"
    DEFAULT_USER_NAME: str = "Board Owner"

    # Label shown for activities without a project
    PRIVATE_LABEL: str = "Private"

    # Claude API
    ANTHROPIC_API_KEY: str = ""
    CLAUDE_MODEL: str = "claude-sonnet-4-20250514"
    CLAUDE_MAX_TOKENS: int = 4096

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
