from __future__ import annotations

import logging
from typing import Iterable

from rabbitry.application.events.models import (
    BirthRecordedEvent,
    CullingRecommendedEvent,
    MatingRecordedEvent,
)
from rabbitry.application.notifications.factory import build_notification
from rabbitry.application.notifications.types import NotificationType
from rabbitry.infrastructure.repos.notifications_sqlalchemy import NotificationsSQLAlchemyRepository
from rabbitry.infrastructure.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


async def dispatch_events(session_factory, events: Iterable[object]) -> None:
    """
    Dispatch events post-commit. Uses a transient session for sending notifications.
    Safe to call in a background task.
    """
    events = list(events)
    if not events:
        return

    async with session_factory() as session:
        notification_service = NotificationService(NotificationsSQLAlchemyRepository(session))

        for event in events:
            try:
                if isinstance(event, MatingRecordedEvent):
                    await _handle_mating_recorded(notification_service, event)
                elif isinstance(event, BirthRecordedEvent):
                    await _handle_birth_recorded(notification_service, event)
                elif isinstance(event, CullingRecommendedEvent):
                    await _handle_culling_recommended(notification_service, event)
                else:
                    logger.debug("No handler for event %s", type(event).__name__)
            except Exception as e:
                await session.rollback()
                logger.error(
                    "Error dispatching event %s: %s", type(event).__name__, e, exc_info=True
                )


async def _send(notification_service: NotificationService, farm_id, built) -> None:
    await notification_service.send_notification(
        farm_id=farm_id,
        type=built.type,
        title=built.title,
        message=built.message,
        priority=built.priority,
        data=built.data,
    )


async def _handle_mating_recorded(
    notification_service: NotificationService, e: MatingRecordedEvent
) -> None:
    built = build_notification(
        NotificationType.MATING_RECORDED,
        breeding_event_id=e.breeding_event_id,
        doe_id=e.doe_id,
        buck_id=e.buck_id,
        doe_tag=e.doe_tag,
        buck_tag=e.buck_tag,
        mating_date=e.mating_date,
        expected_birth_date=e.expected_birth_date,
    )
    await _send(notification_service, e.farm_id, built)


async def _handle_birth_recorded(
    notification_service: NotificationService, e: BirthRecordedEvent
) -> None:
    built = build_notification(
        NotificationType.BIRTH_RECORDED,
        breeding_event_id=e.breeding_event_id,
        doe_id=e.doe_id,
        doe_tag=e.doe_tag,
        litter_size=e.litter_size,
        actual_birth_date=e.actual_birth_date,
    )
    await _send(notification_service, e.farm_id, built)


async def _handle_culling_recommended(
    notification_service: NotificationService, e: CullingRecommendedEvent
) -> None:
    built = build_notification(
        NotificationType.CULLING_ALERT,
        farm_id=e.farm_id,
        doe_id=e.doe_id,
        doe_tag=e.doe_tag,
        breeding_event_id=e.breeding_event_id,
        reasons=list(e.reasons),
        litter_size=e.litter_size,
    )
    await _send(notification_service, e.farm_id, built)
