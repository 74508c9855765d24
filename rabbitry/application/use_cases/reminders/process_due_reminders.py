from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from rabbitry.application.interfaces.notifier import ReminderNotifier
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.reminders import dispatch_reminder, list_due_reminders
from rabbitry.application.use_cases.reminders.dispatch_reminder import DispatchOutcome
from rabbitry.utils.datetime_tz import DEFAULT_TIMEZONE_NAME

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProcessDueSummary:
    farms: int = 0
    sent: int = 0
    already_handled: int = 0
    failed: int = 0


async def execute(
    uow_factory: Callable[[], UnitOfWork],
    notifier: ReminderNotifier,
    *,
    default_timezone: str = DEFAULT_TIMEZONE_NAME,
    fallback_recipients: Sequence[str] = (),
    now: datetime | None = None,
) -> ProcessDueSummary:
    """One evaluator pass: dispatch every reminder due today on every farm.

    Each dispatch runs in its own unit of work so one failure never undoes
    another reminder's delivery.
    """
    summary = ProcessDueSummary()
    async with uow_factory() as uow:
        farm_ids = await uow.reminders.list_farms_with_pending()

    for farm_id in farm_ids:
        summary.farms += 1
        async with uow_factory() as uow:
            due = await list_due_reminders.execute(
                uow, farm_id, default_timezone=default_timezone, now=now
            )
        for reminder in due:
            try:
                async with uow_factory() as uow:
                    outcome = await dispatch_reminder.execute(
                        uow,
                        farm_id,
                        reminder.id,
                        notifier,
                        fallback_recipients=fallback_recipients,
                    )
            except Exception as exc:
                logger.error("Failed dispatching reminder %s: %s", reminder.id, exc, exc_info=True)
                summary.failed += 1
                continue
            if outcome is DispatchOutcome.SENT:
                summary.sent += 1
            elif outcome is DispatchOutcome.ALREADY_HANDLED:
                summary.already_handled += 1
            else:
                summary.failed += 1

    logger.info(
        "Reminder scan finished: farms=%d sent=%d already_handled=%d failed=%d",
        summary.farms,
        summary.sent,
        summary.already_handled,
        summary.failed,
    )
    return summary
