from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

from rabbitry.domain.models.reminder import Reminder


class DeliveryStatus(str, Enum):
    SENT = "sent"
    LIMIT_REACHED = "limit_reached"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    status: DeliveryStatus
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is DeliveryStatus.SENT


class ReminderNotifier(Protocol):
    async def deliver(self, reminder: Reminder, recipients: Sequence[str]) -> DeliveryResult: ...
