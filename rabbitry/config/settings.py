from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    # Farm calendar
    default_timezone: str = "Africa/Nairobi"
    gestation_days: int = 31
    # CORS
    cors_allow_origins: str = "*"
    # Email
    email_provider: str = "logging"  # logging | smtp
    email_from_name: str = "Rabbit Farm Management"
    email_from_address: str = "no-reply@rabbitry.local"
    email_admin_recipients: str = ""
    email_default_locale: str = "en"
    email_daily_limit: int = 500
    email_primary_color: str = "#16a34a"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: SecretStr | None = None
    smtp_use_tls: bool = True
    # Reminder scan (background task started with the app)
    reminder_scan_enabled: bool = False
    reminder_scan_interval_seconds: int = 900

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("gestation_days", "email_daily_limit", "reminder_scan_interval_seconds")
    @classmethod
    def ensure_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        if isinstance(self.cors_allow_origins, str):
            return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]
        return self.cors_allow_origins

    @property
    def email_admin_recipients_list(self) -> list[str]:
        """Convert email_admin_recipients string to list"""
        if not self.email_admin_recipients:
            return []
        return [email.strip() for email in self.email_admin_recipients.split(",") if email.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
