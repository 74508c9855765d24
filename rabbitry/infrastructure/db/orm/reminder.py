from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rabbitry.infrastructure.db.base import Base


class ReminderORM(Base):
    __tablename__ = "reminders"
    __table_args__ = (
        Index("ix_reminders_farm_status", "farm_id", "status"),
        Index("ix_reminders_rabbit_status", "rabbit_id", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    rabbit_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("rabbits.id"), nullable=True
    )
    hutch_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    breeding_event_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("breeding_events.id"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(16), nullable=False)
    severity: Mapped[str] = mapped_column(String(8), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    trigger_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    notify_dates: Mapped[list[ReminderNotifyDateORM]] = relationship(
        back_populates="reminder",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ReminderNotifyDateORM.notify_on",
    )


class ReminderNotifyDateORM(Base):
    __tablename__ = "reminder_notify_dates"

    reminder_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("reminders.id", ondelete="CASCADE"), primary_key=True
    )
    notify_on: Mapped[date] = mapped_column(Date, primary_key=True, index=True)

    reminder: Mapped[ReminderORM] = relationship(back_populates="notify_dates")
