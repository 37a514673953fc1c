"""
Centralized configuration for the Jotter backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., SUPABASE_*, JWT_*, GOOGLE_*).
"""

from functools import lru_cache
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
    app_name: str = "Jotter API"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (credential and note storage)
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Session tokens. The secret is required; startup fails without it.
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # Signup verification
    otp_ttl_seconds: int = 300
    password_hash_rounds: int = 12

    # Google sign-in
    google_client_id: str = ""

    # Outbound email (Resend)
    resend_api_key: str = ""
    email_from: str = "onboarding@resend.dev"
    email_timeout_seconds: float = 10.0

    @property
    def is_production(self) -> bool:
        """Whether diagnostic output must be suppressed."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
