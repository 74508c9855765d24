from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Text, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column

from rabbitry.infrastructure.db.base import Base

OPEN_EVENT_PREDICATE = "actual_birth_date IS NULL AND deleted_at IS NULL"


class BreedingEventORM(Base):
    __tablename__ = "breeding_events"
    __table_args__ = (
        Index("ix_breeding_events_farm_doe", "farm_id", "doe_id", "mating_date"),
        Index("ix_breeding_events_farm_buck", "farm_id", "buck_id", "mating_date"),
        # At most one open (not yet kindled, not retracted) event per doe
        Index(
            "ux_breeding_events_open_doe",
            "doe_id",
            unique=True,
            postgresql_where=text(OPEN_EVENT_PREDICATE),
            sqlite_where=text(OPEN_EVENT_PREDICATE),
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    doe_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("rabbits.id"), nullable=False
    )
    buck_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("rabbits.id"), nullable=False
    )
    mating_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    actual_birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    litter_size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
