from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from rabbitry.application.interfaces.notifier import ReminderNotifier
from rabbitry.application.use_cases.reminders import process_due_reminders
from rabbitry.config.settings import Settings
from rabbitry.infrastructure.db.session import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


async def scan_due_reminders(
    session_factory,
    notifier: ReminderNotifier,
    settings: Settings,
) -> process_due_reminders.ProcessDueSummary | None:
    """Run one pass over every farm's reminders due today."""
    try:
        return await process_due_reminders.execute(
            lambda: SQLAlchemyUnitOfWork(session_factory),
            notifier,
            default_timezone=settings.default_timezone,
            fallback_recipients=settings.email_admin_recipients_list,
        )
    except Exception as e:
        logger.error("Error scanning due reminders: %s", e, exc_info=True)
        return None


async def run_reminder_scan_loop(
    session_factory,
    notifier: ReminderNotifier,
    settings: Settings,
    *,
    sleep: Callable[[float], object] = asyncio.sleep,
) -> None:
    """Scan forever at the configured interval; cancel the task to stop it."""
    interval = settings.reminder_scan_interval_seconds
    logger.info("Reminder scan loop started (every %ss)", interval)
    try:
        while True:
            await scan_due_reminders(session_factory, notifier, settings)
            await sleep(interval)
    except asyncio.CancelledError:
        logger.info("Reminder scan loop stopped")
        raise
