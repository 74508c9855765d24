from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import DECIMAL, Date, DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from rabbitry.infrastructure.db.base import Base


class KitORM(Base):
    __tablename__ = "kits"
    __table_args__ = (Index("ix_kits_farm_number", "farm_id", "kit_number"),)

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    breeding_event_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("breeding_events.id"), nullable=False, index=True
    )
    kit_number: Mapped[str] = mapped_column(String(50), nullable=False)
    sex: Mapped[str | None] = mapped_column(String(6), nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    birth_weight: Mapped[Decimal | None] = mapped_column(DECIMAL(5, 2), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="alive")
    weaning_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
