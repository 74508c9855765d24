from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from rabbitry.infrastructure.db.base import Base


class FarmSettingsORM(Base):
    __tablename__ = "farm_settings"

    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    contact_emails: Mapped[str | None] = mapped_column(Text, nullable=True)  # comma separated
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
