# app/core/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Service account json for firebase_admin
    FIREBASE_CREDENTIALS: str = "app/core/firebase_key.json"

    # Gemini chatbot
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Logging
    AI_DEBUG_MODE: bool = False
    LOG_LEVEL: str = "INFO"

    # Weekly summary refresh worker
    SUMMARY_WORKER_ENABLED: bool = False
    SUMMARY_WORKER_INTERVAL_SECONDS: int = 86400

    # Plain-text report exports
    REPORT_EXPORT_DIR: str = "report_exports"

    # IANA zone used for day-of-week grouping ("" = server local time)
    LOCAL_TIMEZONE: str = ""

    # If you want to read from a .env file, keep this:
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
