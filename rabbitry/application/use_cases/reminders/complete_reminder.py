from __future__ import annotations

import logging
from uuid import UUID

from rabbitry.application.errors import ConflictError, NotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.reminder import Reminder, ReminderStatus

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, farm_id: UUID, reminder_id: UUID) -> Reminder:
    """Manually resolve a pending reminder."""
    reminder = await uow.reminders.get(farm_id, reminder_id)
    if reminder is None:
        raise NotFound(f"Reminder {reminder_id} not found")
    if not await uow.reminders.transition(reminder.id, ReminderStatus.COMPLETED):
        raise ConflictError(
            f"Reminder {reminder_id} is already {reminder.status.value}",
            details={"status": reminder.status.value},
        )
    reminder.transition_to(ReminderStatus.COMPLETED)
    logger.info("Reminder %s completed manually", reminder.id)
    return reminder
