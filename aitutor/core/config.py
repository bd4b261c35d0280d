import logging

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Optional

class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False

    # Chat completion (Groq)
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.1-8b-instant"
    CHAT_TIMEOUT_SECONDS: float = 15.0
    CHAT_TEMPERATURE: float = 0.65
    CHAT_MAX_TOKENS: int = 1500
    CHAT_TOP_P: float = 0.95

    # ID token verification
    AUTH_JWT_SECRET: Optional[str] = None
    AUTH_JWT_ISSUER: Optional[str] = None
    AUTH_JWT_AUDIENCE: Optional[str] = None

    # Document store
    DATABASE_URL: Optional[str] = None
    TEST_DATABASE_URL: Optional[str] = None

    # Background jobs
    REDIS_URL: str = "redis://localhost:6379"
    SUMMARY_QUEUE_NAME: str = "weekly-summary"

    # Notifications
    NOTIFICATIONS_API_KEY: Optional[str] = None
    MOCK_NOTIFICATIONS_SEED: int = 42

    # Calendar day boundary for streaks and weekly windows
    STREAK_TIMEZONE: str = "UTC"

    CORS_ORIGINS: str = "http://localhost:3000"  # comma-separated

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
settings = Settings()


def validate_config(strict: Optional[bool] = None, settings_obj: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate required configuration.

    In strict mode raise RuntimeError; otherwise emit warnings only.
    Secrets are not logged, only missing keys. Missing keys are not fatal
    outside strict mode: the service falls back to mock/demo behavior.
    """
    cfg = settings_obj or settings
    log = logger or logging.getLogger("aitutor")
    strict_mode = strict if strict is not None else getattr(cfg, "CONFIG_STRICT", False)

    required_keys = [
        "DATABASE_URL",
        "AUTH_JWT_SECRET",
        "GROQ_API_KEY",
        "NOTIFICATIONS_API_KEY",
    ]

    missing = [key for key in required_keys if not getattr(cfg, key, None)]
    if missing:
        message = f"Missing required configuration: {', '.join(missing)}"
        if strict_mode:
            raise RuntimeError(message)
        log.warning(message)

    return True
