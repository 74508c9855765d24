from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from rabbitry.application.interfaces.notifier import ReminderNotifier
from rabbitry.config.settings import Settings, get_settings
from rabbitry.infrastructure.db.session import SQLAlchemyUnitOfWork


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_reminder_notifier(request: Request) -> ReminderNotifier:
    notifier = getattr(request.app.state, "reminder_notifier", None)
    if notifier is None:
        raise RuntimeError("Reminder notifier not configured")
    return notifier
