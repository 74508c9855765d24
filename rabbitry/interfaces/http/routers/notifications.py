from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from rabbitry.infrastructure.db.session import SQLAlchemyUnitOfWork
from rabbitry.interfaces.http.deps import get_uow
from rabbitry.interfaces.http.schemas.notifications import (
    MarkAsReadRequest,
    MarkAsReadResponse,
    NotificationListResponse,
    NotificationSchema,
)

router = APIRouter(prefix="/farms/{farm_id}/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    farm_id: UUID,
    unread_only: bool = False,
    limit: int = 50,
    offset: int = 0,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> NotificationListResponse:
    """Get the farm's in-app notifications, newest first."""
    notifications = await uow.notifications.list_by_farm(
        farm_id,
        unread_only=unread_only,
        limit=limit,
        offset=offset,
    )
    return NotificationListResponse(
        notifications=[NotificationSchema.model_validate(n) for n in notifications],
        total=len(notifications),
    )


@router.post("/mark-read", response_model=MarkAsReadResponse)
async def mark_notifications_as_read(
    farm_id: UUID,
    payload: MarkAsReadRequest,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> MarkAsReadResponse:
    """Mark specific notifications as read."""
    marked_count = await uow.notifications.mark_as_read(farm_id, payload.notification_ids)
    await uow.commit()
    logger.info("Marked %d notifications read for farm %s", marked_count, farm_id)
    return MarkAsReadResponse(marked_count=marked_count)
