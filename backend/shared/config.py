"""
Centralized configuration for the mock API backend.

All settings are loaded from environment variables prefixed with MOCKAPI_
(e.g. MOCKAPI_ENVIRONMENT=test, MOCKAPI_AUTH_MODE=mock).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MOCKAPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Mock API"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3002
    reload: bool = False
    api_prefix: str = "/api/v1"

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Mock JWT
    jwt_secret: str = "mock-jwt-secret-key-for-development-only"
    jwt_algorithm: str = "HS256"
    access_token_minutes: int = 60
    refresh_token_days: int = 7
    auth_mode: Literal["mock", "service"] = "service"

    # Artificial latency (milliseconds)
    delay_enabled: bool = True
    delay_min_ms: int = 100
    delay_max_ms: int = 2000

    # Rate limiting
    rate_limit_enabled: bool = True

    # Request logging
    slow_request_ms: int = 1000
    log_level: str = "INFO"
    log_json: bool = False

    # Upload metadata limits
    max_upload_bytes: int = 10 * 1024 * 1024
    max_metadata_fields: int = 20
    max_field_name_length: int = 100
    max_field_value_length: int = 1024

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    @property
    def delay_active(self) -> bool:
        """Latency simulation never runs under test."""
        return self.delay_enabled and not self.is_test

    @property
    def rate_limit_active(self) -> bool:
        """Rate limiting is disabled entirely under test."""
        return self.rate_limit_enabled and not self.is_test


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
