from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence
from uuid import UUID

from rabbitry.application.errors import NotFound
from rabbitry.application.interfaces.notifier import ReminderNotifier
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.reminder import ReminderStatus

logger = logging.getLogger(__name__)


class DispatchOutcome(str, Enum):
    SENT = "sent"
    ALREADY_HANDLED = "already_handled"
    TRANSIENT_FAILURE = "transient_failure"


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    reminder_id: UUID,
    notifier: ReminderNotifier,
    *,
    fallback_recipients: Sequence[str] = (),
) -> DispatchOutcome:
    """Deliver one reminder and move it from pending to sent.

    The status change is claimed with a conditional update before anything is
    delivered and committed only after delivery succeeds; a concurrent worker
    finds the reminder no longer pending and backs off. A failed delivery
    rolls back, leaving the reminder pending for the next scan. This use case
    owns its transaction.
    """
    reminder = await uow.reminders.get(farm_id, reminder_id)
    if reminder is None:
        raise NotFound(f"Reminder {reminder_id} not found")
    if not reminder.is_pending:
        return DispatchOutcome.ALREADY_HANDLED

    claimed = await uow.reminders.transition(reminder.id, ReminderStatus.SENT)
    if not claimed:
        await uow.rollback()
        logger.info("Reminder %s already handled by another worker", reminder.id)
        return DispatchOutcome.ALREADY_HANDLED

    farm_settings = await uow.farm_settings.get(farm_id)
    recipients = list(farm_settings.contact_emails) if farm_settings else []
    if not recipients:
        recipients = list(fallback_recipients)

    result = await notifier.deliver(reminder, recipients)
    if not result.ok:
        await uow.rollback()
        logger.warning(
            "Delivery of reminder %s failed (%s): %s",
            reminder.id,
            result.status.value,
            result.message,
        )
        return DispatchOutcome.TRANSIENT_FAILURE

    await uow.commit()
    logger.info("Reminder %s sent to %d recipients", reminder.id, len(recipients))
    return DispatchOutcome.SENT
