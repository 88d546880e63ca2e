"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Shal & Roosari Admin"
    app_env: Literal["development", "staging", "production"] = "development"
    app_platform: str = "vercel-serverless"
    app_debug: bool = False
    app_log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Database
    database_url: str
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Admin console (HTTP client side)
    admin_api_base_url: str = "http://localhost:8000/api/v1"
    admin_api_timeout: float = 30.0
    json_editor_debounce_ms: int = 300
    template_test_recipient: str = "admin@example.com"

    # Email (fallback defaults, provider config is stored in DB)
    email_from_address: str = "no-reply@shal-roosari.shop"
    email_from_name: str = "Shal & Roosari"

    # SMS
    kavenegar_api_url: str = "https://api.kavenegar.com/v1"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def cors_allows_any_origin(self) -> bool:
        """Check if cross-origin requests are accepted from every origin."""
        return "*" in self.cors_origins

    @property
    def async_database_url(self) -> str:
        """Get database URL with asyncpg driver for async SQLAlchemy."""
        url = self.database_url
        # Convert postgresql:// to postgresql+asyncpg://
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    @property
    def json_editor_debounce_seconds(self) -> float:
        """Get the JSON editor quiescence window in seconds."""
        return self.json_editor_debounce_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
