"""
Application configuration using Pydantic BaseSettings.
Reads configuration from environment variables (12-factor style).
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # MongoDB connection URI (use an Atlas URI in prod)
    MONGO_URI: str
    MONGO_DB: str

    # JWT (JSON Web Token) settings
    JWT_SECRET: str  # must be set in env
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # default 1 week
    # Browsers drop Secure cookies over plain http; turn off for local dev only
    COOKIE_SECURE: bool = True

    # --- Translation API (category names/descriptions -> Arabic) ---
    TRANSLATION_API_URL: str = "https://api.mymemory.translated.net/get"
    TRANSLATION_SOURCE_LANG: str = "fr"
    TRANSLATION_TARGET_LANG: str = "ar"
    TRANSLATION_TIMEOUT_SECONDS: float = 10.0

    # --- Media host (S3-compatible bucket) ---
    MEDIA_ENDPOINT_URL: Optional[str] = None
    MEDIA_ACCESS_KEY_ID: Optional[str] = None
    MEDIA_SECRET_ACCESS_KEY: Optional[str] = None
    MEDIA_BUCKET: str = "nutrition-app"
    MEDIA_REGION: str = "auto"
    MEDIA_PUBLIC_BASE_URL: Optional[str] = None

    # App
    APP_NAME: str = "nutried-backend"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    class Config:
        env_file = ".env"        # local development .env file
        env_file_encoding = "utf-8"


# Single settings instance imported across the app
settings = Settings()
