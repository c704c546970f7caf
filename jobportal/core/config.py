"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage ("mongo" in production, "memory" for local runs and tests)
    storage_backend: str = "mongo"

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "jobportal"

    # JWT Auth (session tokens live 24h)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # SMTP (email channel)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_from: str = ""
    smtp_use_tls: bool = True
    smtp_timeout: float = 20.0

    # Twilio (SMS channel)
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""
    twilio_api_base: str = "https://api.twilio.com"
    twilio_timeout: float = 30.0

    # Listings
    email_log_limit: int = 100
    tenant_scoped_listings: bool = True

    # App
    api_prefix: str = ""
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    @property
    def smtp_sender(self) -> str:
        """Address used in the From header"""
        return self.smtp_from or self.smtp_user

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
