"""Application configuration."""

import os
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "SmartNotes"
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Database - Credentials must come from environment
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "smartnotes"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "smartnotes"

    # Database pool configuration
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 3600

    @property
    def DATABASE_URL(self) -> str:
        """Build async database URL. Uses DATABASE_URL env var if set."""
        external = os.environ.get("DATABASE_URL", "")
        if external:
            if external.startswith("postgresql://"):
                return external.replace("postgresql://", "postgresql+asyncpg://")
            return external
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def DATABASE_URL_SYNC(self) -> str:
        """Build sync database URL for Alembic."""
        external = os.environ.get("DATABASE_URL", "")
        if external:
            return (
                external.replace("postgresql+asyncpg://", "postgresql://")
                .replace("sqlite+aiosqlite://", "sqlite://")
            )
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # External completion API (OpenAI compatible)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_API_BASE: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    @field_validator("OPENAI_API_KEY", mode="before")
    @classmethod
    def empty_key_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # CORS
    # Override with comma-separated env var: CORS_ORIGINS=https://notes.example.com
    CORS_ORIGINS: Union[str, List[str]] = "http://localhost:3000,http://127.0.0.1:3000"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    CORS_ALLOWED_METHODS: List[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    CORS_ALLOWED_HEADERS: List[str] = [
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ]

    @property
    def ai_enabled(self) -> bool:
        """Check if the completion API credential is configured."""
        return bool(self.OPENAI_API_KEY)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.APP_ENV == "production" and not self.DEBUG

    @property
    def expose_error_details(self) -> bool:
        """Internal error messages are only returned in development or debug."""
        return self.APP_ENV == "development" or self.DEBUG

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
