from __future__ import annotations

from rabbitry.config.settings import Settings
from rabbitry.infrastructure.email.models import EmailService
from rabbitry.infrastructure.email.providers.daily_limit import DailyLimitEmailService
from rabbitry.infrastructure.email.providers.logging_provider import LoggingEmailService
from rabbitry.infrastructure.email.providers.smtp_provider import SMTPEmailService


def build_email_service(settings: Settings) -> EmailService:
    provider = (settings.email_provider or "logging").lower()
    inner: EmailService
    if provider == "smtp":
        inner = SMTPEmailService(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password.get_secret_value() if settings.smtp_password else None,
            use_tls=settings.smtp_use_tls,
        )
    elif provider == "logging":
        inner = LoggingEmailService()
    else:
        raise ValueError(f"Unknown email provider: {settings.email_provider}")
    return DailyLimitEmailService(inner, daily_limit=settings.email_daily_limit)
