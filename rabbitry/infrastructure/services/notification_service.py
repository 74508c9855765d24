from __future__ import annotations

import logging
from uuid import UUID

from rabbitry.domain.models.notification import Notification
from rabbitry.infrastructure.repos.notifications_sqlalchemy import NotificationsSQLAlchemyRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for creating in-app notifications with persistence."""

    def __init__(self, notification_repo: NotificationsSQLAlchemyRepository) -> None:
        self.notification_repo = notification_repo

    async def send_notification(
        self,
        farm_id: UUID,
        type: str,
        title: str,
        message: str,
        priority: str = "medium",
        data: dict | None = None,
    ) -> Notification:
        """
        Create a notification for the farm and commit it.
        Farm users pick it up from the notifications listing.
        """
        notification = Notification.create(
            farm_id=farm_id,
            type=type,
            title=title,
            message=message,
            priority=priority,
            data=data,
        )
        saved_notification = await self.notification_repo.add(notification)
        await self.notification_repo.session.commit()
        logger.info(
            "Notification created: id=%s farm=%s type=%s priority=%s",
            saved_notification.id,
            farm_id,
            type,
            priority,
        )
        return saved_notification
