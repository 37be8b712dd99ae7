"""Application configuration settings."""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "url_shortener.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    base_url: Optional[str] = None

    # Application
    app_title: str = "URL Shortener API"
    app_version: str = "0.1.0"
    app_description: str = "Shorten URLs, track clicks and render QR codes for short links"
    log_level: str = "INFO"

    # URL Shortener
    short_code_length: int = 7
    max_short_code_length: int = 20
    min_short_code_length: int = 3
    max_code_attempts: int = 10
    blocked_hosts: list[str] = ["localhost", "127.0.0.1"]

    # QR codes
    qr_box_size: int = 8
    qr_border: int = 1

    @property
    def public_base_url(self) -> str:
        """Externally visible base URL used to compose short URLs."""
        base = self.base_url or f"http://localhost:{self.port}"
        return base.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
