"""
Configuration settings for Clipper LMS backend.

Uses Pydantic settings management for environment variables and configuration.
``SECRET_KEY`` and ``DATABASE_URL`` have no defaults: the process refuses to
start without them.
"""

import json
from typing import Annotated, Optional, List
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import AnyHttpUrl, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # API Settings
    PROJECT_NAME: str = "Clipper LMS"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "RESTful API for a learning management system: users, courses and enrollments"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days, 0 disables expiry
    BCRYPT_ROUNDS: int = 12

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[AnyHttpUrl], NoDecode] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_key_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @field_validator("ACCESS_TOKEN_EXPIRE_MINUTES")
    @classmethod
    def expiry_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be >= 0")
        return v

    # Admin bootstrap (optional)
    FIRST_ADMIN_EMAIL: Optional[str] = None
    FIRST_ADMIN_PASSWORD: Optional[str] = None
    FIRST_ADMIN_NAME: str = "Administrator"

    # Development settings
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def admin_bootstrap_enabled(self) -> bool:
        """Check if a first admin account should be created on startup."""
        return bool(self.FIRST_ADMIN_EMAIL and self.FIRST_ADMIN_PASSWORD)

    @property
    def token_expiry_enabled(self) -> bool:
        return self.ACCESS_TOKEN_EXPIRE_MINUTES > 0

    @property
    def cors_origins(self) -> List[str]:
        """Origins as the CORS middleware compares them (no trailing slash)."""
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


# Create global settings instance
settings = Settings()
