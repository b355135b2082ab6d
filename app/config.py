"""
Corkboard – Application configuration.
Reads environment variables from a .env file via pydantic-settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──
    APP_NAME: str = "Corkboard"
    VERSION: str = "0.1.0"
    BUILD_NUMBER: str = "dev"
    EDITION: str = "standalone"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api/v2"

    # ── Database ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./corkboard.db"
    AUTO_CREATE_TABLES: bool = True

    # ── Sessions / JWT ──
    SECRET_KEY: str = "change-me-to-a-random-secret"
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 60 * 24 * 30
    BCRYPT_ROUNDS: int = 12

    # ── Feature toggles ──
    ENABLE_PUBLIC_SIGNUP: bool = True

    # ── Notifications ──
    NOTIFICATIONS_DEFAULT_LIMIT: int = 50


settings = Settings()
