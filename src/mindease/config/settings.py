"""
MindEase Application Settings

Configuration management using Pydantic Settings.
All values can be overridden from environment variables.

LOCALIZATION: Crisis keywords live here rather than in the
detector so that other languages can be swapped in per deployment.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CRISIS_KEYWORDS: tuple[str, ...] = (
    "suicide",
    "kill myself",
    "end my life",
    "want to die",
    "hurt myself",
    "self harm",
    "cutting",
    "overdose",
    "jump off",
    "hanging",
    "no point living",
    "better off dead",
    "can't go on",
)


class ConversationSettings(BaseSettings):
    """Conversation session and classifier configuration."""

    model_config = SettingsConfigDict(env_prefix="MINDEASE_CONVERSATION_")

    max_context_messages: int = Field(
        default=10, ge=1, le=100,
        description="Rolling window size per session",
    )
    context_ttl_seconds: int = Field(
        default=3600, ge=1,
        description="Idle time after which a session is evicted",
    )
    sweep_interval_seconds: int = Field(
        default=3600, ge=1,
        description="Period of the session reaper",
    )
    reaper_enabled: bool = Field(default=True, description="Run the periodic reaper")
    max_message_length: int = Field(default=1000, ge=1, le=10000)
    crisis_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CRISIS_KEYWORDS),
        description="Case-insensitive crisis phrases",
    )

    @field_validator("crisis_keywords")
    @classmethod
    def validate_crisis_keywords(cls, v: list[str]) -> list[str]:
        """Reject an empty vocabulary; crisis detection must never be disabled by config."""
        keywords = [k.strip().lower() for k in v if k.strip()]
        if not keywords:
            raise ValueError("crisis_keywords must contain at least one phrase")
        return keywords


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with MINDEASE_ prefix.

    Usage:
        settings = get_settings()
        ttl = settings.conversation.context_ttl_seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="MINDEASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # Nested settings
    conversation: ConversationSettings = Field(default_factory=ConversationSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly and inject it.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
