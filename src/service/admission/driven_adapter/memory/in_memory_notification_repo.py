from typing import List, Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_notification_repo import INotificationRepo
from src.service.admission.domain.entity.notification_entity import NotificationEntity
from src.service.admission.driven_adapter.memory.in_memory_database import InMemoryDatabase


class InMemoryNotificationRepo(INotificationRepo):
    """Writes go straight to the table, like the autocommit PostgreSQL repo"""

    def __init__(self, *, database: InMemoryDatabase) -> None:
        self.database = database

    @property
    def _table(self) -> dict[int, NotificationEntity]:
        return self.database.tables['notification']

    @Logger.io
    async def create(self, *, notification: NotificationEntity) -> NotificationEntity:
        created = attrs.evolve(notification, id=self.database.next_id('notification'))
        self._table[created.id] = created  # type: ignore[index]
        return created

    @Logger.io
    async def get_by_id(self, *, notification_id: int) -> Optional[NotificationEntity]:
        return self._table.get(notification_id)

    @Logger.io
    async def list_by_user_id(
        self, *, user_id: int, unread_only: bool = False
    ) -> List[NotificationEntity]:
        notifications = [
            n
            for n in self._table.values()
            if n.user_id == user_id and not (unread_only and n.is_read)
        ]
        return sorted(notifications, key=lambda n: (n.created_at, n.id), reverse=True)

    @Logger.io
    async def count_unread(self, *, user_id: int) -> int:
        return sum(1 for n in self._table.values() if n.user_id == user_id and not n.is_read)

    @Logger.io
    async def mark_as_read(self, *, notification_id: int) -> Optional[NotificationEntity]:
        notification = self._table.get(notification_id)
        if notification is None:
            return None
        self._table[notification_id] = notification.mark_as_read()
        return self._table[notification_id]

    @Logger.io
    async def mark_all_as_read(self, *, user_id: int) -> int:
        unread = [n for n in self._table.values() if n.user_id == user_id and not n.is_read]
        for notification in unread:
            self._table[notification.id] = notification.mark_as_read()  # type: ignore[index]
        return len(unread)
