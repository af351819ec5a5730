"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal, Optional

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
    app_name: str = "Vacation Planner API"
    app_version: str = "1.0.0"
    debug: bool = False
    port: int = 8490
    log_level: str = "INFO"

    # Frontend origins allowed by CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Theme used when a request does not name one
    default_theme: Literal["light", "dark"] = "light"

    # External APIs
    nager_api_url: str = "https://date.nager.at/api/v3"
    holiday_fetch_timeout: float = 10.0

    # HTTP Proxy (for external API calls)
    # Option 1: Direct proxy URL
    http_proxy: Optional[str] = None  # e.g., "http://proxy.company.com:8080"
    https_proxy: Optional[str] = None
    # Proxy authentication (if required)
    proxy_username: Optional[str] = None
    proxy_password: Optional[str] = None
    # Option 2: PAC file URL (parsed once for the first PROXY directive)
    proxy_pac_url: Optional[str] = None
    # SSL verification (disable only if the proxy does SSL inspection)
    proxy_verify_ssl: bool = True
    # Path to custom CA certificate for corporate proxies
    proxy_ca_cert: Optional[str] = None

    @property
    def nager_base_url(self) -> str:
        """Nager.Date base URL without a trailing slash."""
        return self.nager_api_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
