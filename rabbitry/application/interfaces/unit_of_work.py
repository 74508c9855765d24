from __future__ import annotations

from typing import Protocol

from rabbitry.application.interfaces.repositories.breeding_events import (
    BreedingEventsRepository,
)
from rabbitry.application.interfaces.repositories.farm_settings import FarmSettingsRepository
from rabbitry.application.interfaces.repositories.kits import KitsRepository
from rabbitry.application.interfaces.repositories.notifications import NotificationsRepository
from rabbitry.application.interfaces.repositories.rabbits import RabbitsRepository
from rabbitry.application.interfaces.repositories.reminders import RemindersRepository


class UnitOfWork(Protocol):
    rabbits: RabbitsRepository
    breeding_events: BreedingEventsRepository
    reminders: RemindersRepository
    kits: KitsRepository
    farm_settings: FarmSettingsRepository
    notifications: NotificationsRepository
    # Domain events collected during the transaction
    events: list

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    # Record a domain event during the transaction
    def add_event(self, event: object) -> None: ...

    # Drain collected events (used for post-commit dispatch)
    def drain_events(self) -> list: ...
