from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "UDMS Console"
    ENV: str = "development"
    LOG_LEVEL: str = Field("INFO", env="LOG_LEVEL")

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # -------------------------------------------------
    # Kernel limits
    # -------------------------------------------------
    AUDIT_LOG_CAPACITY: int = Field(100, env="AUDIT_LOG_CAPACITY", description="Rolling audit buffer size (oldest evicted first)")
    NOTIFICATION_TTL_SECONDS: float = Field(6, env="NOTIFICATION_TTL_SECONDS")
    LOGIN_ERROR_TTL_SECONDS: float = Field(3, env="LOGIN_ERROR_TTL_SECONDS")
    PAYMENT_REWARD_POINTS: int = Field(50, env="PAYMENT_REWARD_POINTS")

    # -------------------------------------------------
    # External state (session blob + theme flag)
    # -------------------------------------------------
    STATE_FILE: Optional[str] = Field(None, env="STATE_FILE", description="JSON key/value file; unset keeps state in memory")
    SESSION_STORAGE_KEY: str = "udms_session"
    THEME_STORAGE_KEY: str = "theme"

    # -------------------------------------------------
    # Telemetry tick
    # -------------------------------------------------
    TELEMETRY_INTERVAL_SECONDS: float = Field(12, env="TELEMETRY_INTERVAL_SECONDS")
    TELEMETRY_PROBABILITY: float = Field(0.15, env="TELEMETRY_PROBABILITY")
    TELEMETRY_HIGHLIGHT_SECONDS: float = Field(1.5, env="TELEMETRY_HIGHLIGHT_SECONDS")

    # -------------------------------------------------
    # AI collaborator (Gemini REST)
    # -------------------------------------------------
    GEMINI_API_KEY: Optional[str] = Field(None, env="GEMINI_API_KEY")
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_CHAT_MODEL: str = "gemini-3-flash-preview"
    GEMINI_PRO_MODEL: str = "gemini-3-pro-preview"
    GEMINI_TTS_MODEL: str = "gemini-2.5-flash-preview-tts"
    ASSISTANT_TIMEOUT_SECONDS: float = Field(30, env="ASSISTANT_TIMEOUT_SECONDS")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()
