from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, timezone

from rabbitry.infrastructure.email.models import EmailLimitReached, EmailMessage, EmailService

logger = logging.getLogger(__name__)


class DailyLimitEmailService(EmailService):
    """Caps the number of messages an inner provider sends per UTC day.

    Once the cap is hit every send raises EmailLimitReached until the day rolls over.
    """

    def __init__(
        self,
        inner: EmailService,
        *,
        daily_limit: int,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.inner = inner
        self.daily_limit = daily_limit
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._day: date | None = None
        self._count = 0

    @property
    def sent_today(self) -> int:
        self._roll_over()
        return self._count

    def _roll_over(self) -> None:
        today = self._clock().astimezone(timezone.utc).date()
        if today != self._day:
            self._day = today
            self._count = 0

    async def send(self, message: EmailMessage) -> None:
        self._roll_over()
        if self._count >= self.daily_limit:
            logger.warning(
                "Daily email limit of %d reached; not sending '%s'",
                self.daily_limit,
                message.subject,
            )
            raise EmailLimitReached(f"Daily limit of {self.daily_limit} emails reached")
        await self.inner.send(message)
        self._count += 1
