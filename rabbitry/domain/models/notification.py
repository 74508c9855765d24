from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Notification:
    id: UUID
    farm_id: UUID
    type: str
    title: str
    message: str
    priority: str = "medium"
    data: dict | None = None
    read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    read_at: datetime | None = None

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        type: str,
        title: str,
        message: str,
        priority: str = "medium",
        data: dict | None = None,
    ) -> Notification:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            type=type,
            title=title,
            message=message,
            priority=priority,
            data=data,
            read=False,
            created_at=datetime.now(timezone.utc),
            read_at=None,
        )

    def mark_as_read(self) -> None:
        if not self.read:
            self.read = True
            self.read_at = datetime.now(timezone.utc)
