from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rabbitry.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.rabbits = None
        self.breeding_events = None
        self.reminders = None
        self.kits = None
        self.farm_settings = None
        self.notifications = None
        self.events: list = []

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from rabbitry.infrastructure.repos.breeding_events_sqlalchemy import (
            BreedingEventsSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.farm_settings_sqlalchemy import (
            FarmSettingsSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.kits_sqlalchemy import KitsSQLAlchemyRepository
        from rabbitry.infrastructure.repos.notifications_sqlalchemy import (
            NotificationsSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.rabbits_sqlalchemy import RabbitsSQLAlchemyRepository
        from rabbitry.infrastructure.repos.reminders_sqlalchemy import (
            RemindersSQLAlchemyRepository,
        )

        self.rabbits = RabbitsSQLAlchemyRepository(self.session)
        self.breeding_events = BreedingEventsSQLAlchemyRepository(self.session)
        self.reminders = RemindersSQLAlchemyRepository(self.session)
        self.kits = KitsSQLAlchemyRepository(self.session)
        self.farm_settings = FarmSettingsSQLAlchemyRepository(self.session)
        self.notifications = NotificationsSQLAlchemyRepository(self.session)
        self.events = []
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
                self.events = []
        finally:
            await self.session.close()
            self.session = None
            self.rabbits = None
            self.breeding_events = None
            self.reminders = None
            self.kits = None
            self.farm_settings = None
            self.notifications = None

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
        self.events = []

    def add_event(self, event: object) -> None:
        self.events.append(event)

    def drain_events(self) -> list:
        events, self.events = self.events, []
        return events
