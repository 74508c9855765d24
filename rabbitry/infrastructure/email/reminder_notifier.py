from __future__ import annotations

import logging
from typing import Sequence

from rabbitry.application.interfaces.notifier import DeliveryResult, DeliveryStatus
from rabbitry.config.settings import Settings
from rabbitry.domain.models.reminder import Reminder
from rabbitry.infrastructure.email.models import EmailLimitReached, EmailService
from rabbitry.infrastructure.email.renderer.engine import EmailTemplateRenderer

logger = logging.getLogger(__name__)


class EmailReminderNotifier:
    """Delivers reminders as templated emails through an EmailService."""

    def __init__(
        self,
        email_service: EmailService,
        renderer: EmailTemplateRenderer,
        settings: Settings,
    ) -> None:
        self.email_service = email_service
        self.renderer = renderer
        self.settings = settings

    async def deliver(self, reminder: Reminder, recipients: Sequence[str]) -> DeliveryResult:
        if not recipients:
            logger.info("Reminder %s has no recipients; nothing to send", reminder.id)
            return DeliveryResult(DeliveryStatus.SENT, "no recipients")

        message = self.renderer.render_reminder(reminder)
        message.to = list(recipients)
        message.from_email = self.settings.email_from_address
        message.from_name = self.settings.email_from_name

        try:
            await self.email_service.send(message)
        except EmailLimitReached as exc:
            return DeliveryResult(DeliveryStatus.LIMIT_REACHED, str(exc))
        except Exception as exc:
            logger.error("Email delivery failed for reminder %s: %s", reminder.id, exc, exc_info=True)
            return DeliveryResult(DeliveryStatus.ERROR, str(exc))
        return DeliveryResult(DeliveryStatus.SENT)
