"""
In-memory storage backend

Process-local tables keyed by id. Writes made inside a unit of work are staged
and only land in these tables on commit; row locks are emulated with a
KeyedLock per entity key. Ids come from per-table counters and are never
reused, even when the unit of work that drew them rolls back.
"""

import itertools
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, Iterator

from src.platform.logging.loguru_io import Logger
from src.platform.state.keyed_lock import KeyedLock
from src.service.admission.domain.entity.event_entity import EventEntity
from src.service.admission.domain.entity.user_entity import UserEntity


class InMemoryDatabase:
    TABLES = ('user', 'event', 'ticket', 'attendance_log', 'payment', 'notification')

    def __init__(self) -> None:
        self.tables: Dict[str, Dict[int, Any]] = {name: {} for name in self.TABLES}
        self.locks = KeyedLock()
        self._sequences: Dict[str, Iterator[int]] = defaultdict(lambda: itertools.count(1))

    def next_id(self, table: str) -> int:
        return next(self._sequences[table])

    def add_user(self, user: UserEntity) -> UserEntity:
        self.tables['user'][user.id] = user
        return user

    def add_event(self, event: EventEntity) -> EventEntity:
        self.tables['event'][event.id] = event
        return event

    def seed_demo_data(self) -> None:
        """Single user and event so a fresh memory backend can be exercised over HTTP"""
        now = datetime.now(timezone.utc)
        self.add_user(UserEntity(id=1, name='Demo Attendee', email='attendee@example.com'))
        self.add_event(
            EventEntity(
                id=1,
                name='Demo Concert',
                location='Main Hall',
                start_date=now + timedelta(days=7),
                end_date=now + timedelta(days=7, hours=3),
                capacity=100,
                ticket_price=Decimal('500.00'),
            )
        )
        Logger.base.info('🌱 [MEMORY] Seeded demo user 1 and event 1')
