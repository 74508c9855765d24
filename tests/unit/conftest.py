from __future__ import annotations

import copy
from datetime import date
from typing import Iterable
from uuid import UUID

import pytest

from rabbitry.application.errors import ConflictError
from rabbitry.application.interfaces.notifier import DeliveryResult, DeliveryStatus
from rabbitry.domain.models.breeding_event import BreedingEvent
from rabbitry.domain.models.farm_settings import FarmSettings
from rabbitry.domain.models.kit import Kit
from rabbitry.domain.models.notification import Notification
from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.models.reminder import Reminder, ReminderStatus


class MemoryState:
    def __init__(self) -> None:
        self.rabbits: dict[UUID, Rabbit] = {}
        self.events: dict[UUID, BreedingEvent] = {}
        self.reminders: dict[UUID, Reminder] = {}
        self.kits: dict[UUID, Kit] = {}
        self.settings: dict[UUID, FarmSettings] = {}
        self.notifications: dict[UUID, Notification] = {}


class MemoryStore:
    """Shared in-memory tables; every unit of work sees the committed state."""

    def __init__(self) -> None:
        self.state = MemoryState()
        self.commits = 0
        self.rollbacks = 0

    def uow(self) -> FakeUnitOfWork:
        return FakeUnitOfWork(self)


class RabbitsRepo:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def add(self, rabbit):
        self.store.state.rabbits[rabbit.id] = copy.deepcopy(rabbit)
        return rabbit

    async def get(self, farm_id, rabbit_id):
        rabbit = self.store.state.rabbits.get(rabbit_id)
        if rabbit is None or rabbit.farm_id != farm_id or rabbit.deleted_at is not None:
            return None
        return copy.deepcopy(rabbit)

    async def update(self, rabbit):
        self.store.state.rabbits[rabbit.id] = copy.deepcopy(rabbit)
        return rabbit

    async def list(self, farm_id, sex=None, limit=100, offset=0):
        items = [r for r in self.store.state.rabbits.values() if r.farm_id == farm_id]
        if sex:
            items = [r for r in items if r.sex == sex]
        return [copy.deepcopy(r) for r in items[offset : offset + limit]]


class BreedingEventsRepo:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def _active(self, farm_id):
        return [
            e
            for e in self.store.state.events.values()
            if e.farm_id == farm_id and e.deleted_at is None
        ]

    async def add(self, event):
        if any(e.doe_id == event.doe_id and e.is_open for e in self.store.state.events.values()):
            raise ConflictError("Doe already has an open breeding event")
        self.store.state.events[event.id] = copy.deepcopy(event)
        return event

    async def update(self, event, expected_version):
        stored = self.store.state.events.get(event.id)
        if stored is None or stored.version != expected_version:
            raise ConflictError("Breeding event was modified concurrently")
        self.store.state.events[event.id] = copy.deepcopy(event)
        return event

    async def get(self, farm_id, event_id):
        for e in self._active(farm_id):
            if e.id == event_id:
                return copy.deepcopy(e)
        return None

    async def get_open_for_doe(self, farm_id, doe_id):
        for e in self._active(farm_id):
            if e.doe_id == doe_id and e.actual_birth_date is None:
                return copy.deepcopy(e)
        return None

    async def list_buck_matings(self, farm_id, buck_id, date_from, date_to):
        return [
            copy.deepcopy(e)
            for e in self._active(farm_id)
            if e.buck_id == buck_id and date_from <= e.mating_date <= date_to
        ]

    async def get_latest_completed(self, farm_id, doe_id):
        items = await self.list_recent_completed(farm_id, doe_id, limit=1)
        return items[0] if items else None

    async def list_recent_completed(self, farm_id, doe_id, limit=3):
        done = [
            e for e in self._active(farm_id) if e.doe_id == doe_id and e.actual_birth_date
        ]
        done.sort(key=lambda e: e.actual_birth_date, reverse=True)
        return [copy.deepcopy(e) for e in done[:limit]]

    async def list(self, farm_id, doe_id=None, open_only=False, limit=None, offset=0):
        items = self._active(farm_id)
        if doe_id:
            items = [e for e in items if e.doe_id == doe_id]
        if open_only:
            items = [e for e in items if e.actual_birth_date is None]
        items.sort(key=lambda e: e.mating_date, reverse=True)
        end = None if limit is None else offset + limit
        return [copy.deepcopy(e) for e in items[offset:end]]


class RemindersRepo:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def add_many(self, reminders: Iterable[Reminder]):
        saved = list(reminders)
        for r in saved:
            self.store.state.reminders[r.id] = copy.deepcopy(r)
        return saved

    async def get(self, farm_id, reminder_id):
        r = self.store.state.reminders.get(reminder_id)
        if r is None or r.farm_id != farm_id:
            return None
        return copy.deepcopy(r)

    def _sorted(self, items):
        return sorted(items, key=lambda r: (-r.severity.rank, r.trigger_at))

    async def list(
        self, farm_id, category=None, severity=None, status=None, rabbit_id=None, limit=50, offset=0
    ):
        items = [r for r in self.store.state.reminders.values() if r.farm_id == farm_id]
        if category:
            items = [r for r in items if r.category.value == category]
        if severity:
            items = [r for r in items if r.severity.value == severity]
        if status:
            items = [r for r in items if r.status.value == status]
        if rabbit_id:
            items = [r for r in items if r.rabbit_id == rabbit_id]
        return [copy.deepcopy(r) for r in self._sorted(items)[offset : offset + limit]]

    async def list_due(self, farm_id, on_date: date):
        items = [
            r
            for r in self.store.state.reminders.values()
            if r.farm_id == farm_id and r.is_due_on(on_date)
        ]
        return [copy.deepcopy(r) for r in self._sorted(items)]

    async def list_farms_with_pending(self):
        return sorted({r.farm_id for r in self.store.state.reminders.values() if r.is_pending}, key=str)

    async def exists_for_event(self, breeding_event_id, name):
        return any(
            r.breeding_event_id == breeding_event_id and r.name == name
            for r in self.store.state.reminders.values()
        )

    async def transition(self, reminder_id, target: ReminderStatus):
        r = self.store.state.reminders.get(reminder_id)
        if r is None or not r.is_pending:
            return False
        r.transition_to(target)
        return True

    async def close_pending_for_rabbit(self, rabbit_id, categories, target):
        wanted = set(categories)
        count = 0
        for r in self.store.state.reminders.values():
            if r.rabbit_id == rabbit_id and r.is_pending and r.category in wanted:
                r.transition_to(target)
                count += 1
        return count


class KitsRepo:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def add_many(self, kits):
        saved = list(kits)
        for k in saved:
            self.store.state.kits[k.id] = copy.deepcopy(k)
        return saved

    async def count_for_event(self, breeding_event_id):
        return sum(1 for k in self.store.state.kits.values() if k.breeding_event_id == breeding_event_id)

    async def find_existing_numbers(self, farm_id, kit_numbers):
        return [
            k.kit_number
            for k in self.store.state.kits.values()
            if k.farm_id == farm_id and k.kit_number in kit_numbers
        ]

    async def list_for_event(self, breeding_event_id):
        return [
            copy.deepcopy(k)
            for k in self.store.state.kits.values()
            if k.breeding_event_id == breeding_event_id
        ]


class FarmSettingsRepo:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def get(self, farm_id):
        s = self.store.state.settings.get(farm_id)
        return copy.deepcopy(s) if s else None

    async def upsert(self, settings):
        self.store.state.settings[settings.farm_id] = copy.deepcopy(settings)
        return settings


class NotificationsRepo:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def add(self, notification):
        self.store.state.notifications[notification.id] = copy.deepcopy(notification)
        return notification

    async def list_by_farm(self, farm_id, *, unread_only=False, limit=50, offset=0):
        items = [n for n in self.store.state.notifications.values() if n.farm_id == farm_id]
        if unread_only:
            items = [n for n in items if not n.read]
        return items[offset : offset + limit]

    async def mark_as_read(self, farm_id, notification_ids):
        count = 0
        for nid in notification_ids:
            n = self.store.state.notifications.get(nid)
            if n and n.farm_id == farm_id and not n.read:
                n.mark_as_read()
                count += 1
        return count


class FakeUnitOfWork:
    """Snapshot-based transaction over a MemoryStore."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store
        self.rabbits = RabbitsRepo(store)
        self.breeding_events = BreedingEventsRepo(store)
        self.reminders = RemindersRepo(store)
        self.kits = KitsRepo(store)
        self.farm_settings = FarmSettingsRepo(store)
        self.notifications = NotificationsRepo(store)
        self.events: list = []
        self._snapshot: MemoryState | None = None

    async def __aenter__(self):
        self._snapshot = copy.deepcopy(self.store.state)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc:
            await self.rollback()

    async def commit(self) -> None:
        self.store.commits += 1
        self._snapshot = copy.deepcopy(self.store.state)

    async def rollback(self) -> None:
        self.store.rollbacks += 1
        if self._snapshot is not None:
            self.store.state = copy.deepcopy(self._snapshot)
        self.events = []

    def add_event(self, event: object) -> None:
        self.events.append(event)

    def drain_events(self) -> list:
        events, self.events = self.events, []
        return events


class RecordingNotifier:
    def __init__(self, *results: DeliveryResult) -> None:
        self._results = list(results)
        self.calls: list[tuple[Reminder, list[str]]] = []

    async def deliver(self, reminder, recipients):
        self.calls.append((reminder, list(recipients)))
        if self._results:
            return self._results.pop(0)
        return DeliveryResult(DeliveryStatus.SENT)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def seed(store: MemoryStore, farm_id):
    """Return a helper that stores a doe or buck directly in the store."""

    def _seed(tag: str, sex: str, **kwargs) -> Rabbit:
        rabbit = Rabbit.create(farm_id=farm_id, tag=tag, sex=sex, **kwargs)
        store.state.rabbits[rabbit.id] = copy.deepcopy(rabbit)
        return rabbit

    return _seed


@pytest.fixture()
def notifier_factory():
    return RecordingNotifier
