from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from shiftsync.core.enums import UserRole


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Token authentication
    JWT_SECRET: str = "shiftsync-dev-secret-key"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60  # 1 week

    # Application
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # Initial administrator created on startup
    SEED_ADMIN_ENABLED: bool = True
    SEED_ADMIN_USERNAME: str = "admin"
    SEED_ADMIN_PASSWORD: str = "password"
    SEED_ADMIN_EMAIL: str = "admin@example.com"
    # super_admin lets a fresh deployment reach owner-only actions
    SEED_ADMIN_ROLE: UserRole = UserRole.ADMIN

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
