"""
Test Configuration and Fixtures

This module provides:
- Environment setup (memory storage, test log dir) before application imports
- An isolated InMemoryDatabase per test, seeded with one attendee and events
- A unit-of-work factory and a mocked notification emitter for use cases
- A unit of work that yields inside the critical section, and a switch that
  disables KeyedLock, for the concurrency tests
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the DI container read STORAGE_BACKEND at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    os.environ['STORAGE_BACKEND'] = 'memory'
    os.environ['SEED_DEMO_DATA'] = 'false'
    os.environ.setdefault('DEPLOY_ENV', 'test')

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

# ruff: noqa: E402
import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Optional
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.state.keyed_lock import KeyedLock
from src.service.admission.app.interface.i_notification_emitter import INotificationEmitter
from src.service.admission.domain.entity.attendance_log_entity import AttendanceLogEntity
from src.service.admission.domain.entity.event_entity import EventEntity
from src.service.admission.domain.entity.ticket_entity import TicketEntity
from src.service.admission.domain.entity.user_entity import UserEntity
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.driven_adapter.memory.in_memory_database import InMemoryDatabase
from src.service.admission.driven_adapter.memory.in_memory_repo_impl import (
    InMemoryAttendanceLogRepo,
    InMemoryEventRepo,
)
from src.service.admission.driven_adapter.memory.in_memory_unit_of_work import (
    InMemoryUnitOfWork,
)

from test.constants import (
    ATTENDEE_EMAIL,
    ATTENDEE_ID,
    ATTENDEE_NAME,
    CONCERT_EVENT_ID,
    CONCERT_EVENT_NAME,
    FREE_EVENT_ID,
    SMALL_EVENT_ID,
)


@pytest.fixture
def attendee() -> UserEntity:
    return UserEntity(id=ATTENDEE_ID, name=ATTENDEE_NAME, email=ATTENDEE_EMAIL)


@pytest.fixture
def concert_event() -> EventEntity:
    start = datetime(2030, 6, 1, 19, 0, tzinfo=timezone.utc)
    return EventEntity(
        id=CONCERT_EVENT_ID,
        name=CONCERT_EVENT_NAME,
        location='Open Grounds',
        start_date=start,
        end_date=start + timedelta(hours=4),
        capacity=10,
        tickets_sold=0,
        ticket_price=Decimal('250.00'),
    )


@pytest.fixture
def in_memory_database(attendee: UserEntity, concert_event: EventEntity) -> InMemoryDatabase:
    database = InMemoryDatabase()
    database.add_user(attendee)
    database.add_event(concert_event)
    database.add_event(
        EventEntity(id=FREE_EVENT_ID, name='Community Meetup', capacity=50, ticket_price=Decimal('0'))
    )
    database.add_event(
        EventEntity(
            id=SMALL_EVENT_ID,
            name='Workshop',
            capacity=5,
            tickets_sold=3,
            ticket_price=Decimal('100.00'),
        )
    )
    return database


@pytest.fixture
def uow_factory(in_memory_database: InMemoryDatabase) -> Callable[[], AbstractUnitOfWork]:
    return lambda: InMemoryUnitOfWork(database=in_memory_database)



class _YieldingEventRepo(InMemoryEventRepo):
    async def update_tickets_sold(self, *, event: EventEntity) -> None:
        await asyncio.sleep(0)
        await super().update_tickets_sold(event=event)


class _YieldingAttendanceLogRepo(InMemoryAttendanceLogRepo):
    async def get_latest_by_ticket_id(self, *, ticket_id: int) -> Optional[AttendanceLogEntity]:
        await asyncio.sleep(0)
        return await super().get_latest_by_ticket_id(ticket_id=ticket_id)


class YieldingUnitOfWork(InMemoryUnitOfWork):
    """
    Gives up the event loop between the locked read and the write that
    depends on it, the way a real database round trip would
    """

    async def __aenter__(self) -> AbstractUnitOfWork:
        uow = await super().__aenter__()
        self.event_repo = _YieldingEventRepo(uow=self)
        self.attendance_log_repo = _YieldingAttendanceLogRepo(uow=self)
        return uow


@pytest.fixture
def yielding_uow_factory(
    in_memory_database: InMemoryDatabase,
) -> Callable[[], AbstractUnitOfWork]:
    return lambda: YieldingUnitOfWork(database=in_memory_database)


@pytest.fixture
def without_keyed_locks(monkeypatch: pytest.MonkeyPatch) -> None:
    """Turn every KeyedLock.hold into a no-op so contenders are not serialized"""

    @asynccontextmanager
    async def _no_lock(self: KeyedLock, key: str) -> AsyncIterator[None]:
        yield

    monkeypatch.setattr(KeyedLock, 'hold', _no_lock)


@pytest.fixture
def mock_notification_emitter() -> AsyncMock:
    return AsyncMock(spec=INotificationEmitter)


@pytest.fixture
def issue_ticket(in_memory_database: InMemoryDatabase) -> Callable[..., TicketEntity]:
    """Factory that stores a ticket directly, bypassing booking and capacity"""

    def _issue(
        *,
        event_id: int = CONCERT_EVENT_ID,
        user_id: int = ATTENDEE_ID,
        ticket_type: str = 'REGULAR',
        status: TicketStatus = TicketStatus.ACTIVE,
    ) -> TicketEntity:
        ticket = attrs.evolve(
            TicketEntity.issue(
                event_id=event_id,
                user_id=user_id,
                ticket_type=ticket_type,
                price=Decimal('250.00'),
            ),
            id=in_memory_database.next_id('ticket'),
            status=status,
        )
        in_memory_database.tables['ticket'][ticket.id] = ticket
        return ticket

    return _issue
