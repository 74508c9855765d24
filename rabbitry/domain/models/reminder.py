from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class ReminderCategory(str, Enum):
    BREEDING = "breeding"
    BIRTH = "birth"
    CULLING = "culling"
    GENERIC = "generic"


class ReminderSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return {"low": 0, "medium": 1, "high": 2}[self.value]


class ReminderStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    REJECTED = "rejected"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        return self is not ReminderStatus.PENDING

    def can_transition_to(self, target: ReminderStatus) -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[ReminderStatus, frozenset[ReminderStatus]] = {
    ReminderStatus.PENDING: frozenset(
        {ReminderStatus.SENT, ReminderStatus.REJECTED, ReminderStatus.COMPLETED}
    ),
    ReminderStatus.SENT: frozenset(),
    ReminderStatus.REJECTED: frozenset(),
    ReminderStatus.COMPLETED: frozenset(),
}


class InvalidReminderTransition(ValueError):
    def __init__(self, current: ReminderStatus, target: ReminderStatus) -> None:
        super().__init__(f"Cannot move reminder from {current.value} to {target.value}")
        self.current = current
        self.target = target


@dataclass(slots=True)
class Reminder:
    id: UUID
    farm_id: UUID
    name: str
    category: ReminderCategory
    severity: ReminderSeverity
    trigger_at: datetime
    message: str
    notify_on: list[date]
    status: ReminderStatus = ReminderStatus.PENDING

    rabbit_id: UUID | None = None
    hutch_id: str | None = None
    breeding_event_id: UUID | None = None

    sent_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        name: str,
        category: ReminderCategory,
        severity: ReminderSeverity,
        trigger_at: datetime,
        message: str,
        notify_on: list[date],
        rabbit_id: UUID | None = None,
        hutch_id: str | None = None,
        breeding_event_id: UUID | None = None,
    ) -> Reminder:
        if not notify_on:
            raise ValueError("A reminder needs at least one notify-on date")
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            name=name,
            category=ReminderCategory(category),
            severity=ReminderSeverity(severity),
            trigger_at=trigger_at,
            message=message,
            notify_on=sorted(set(notify_on)),
            status=ReminderStatus.PENDING,
            rabbit_id=rabbit_id,
            hutch_id=hutch_id,
            breeding_event_id=breeding_event_id,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return self.status is ReminderStatus.PENDING

    def is_due_on(self, day: date) -> bool:
        return self.is_pending and day in self.notify_on

    def transition_to(self, target: ReminderStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidReminderTransition(self.status, target)
        self.status = target
        now = datetime.now(timezone.utc)
        if target is ReminderStatus.SENT:
            self.sent_at = now
        self.updated_at = now
