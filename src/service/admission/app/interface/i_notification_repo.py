from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.admission.domain.entity.notification_entity import NotificationEntity


class INotificationRepo(ABC):
    """Notification inbox storage (outside any booking or check-in unit of work)"""

    @abstractmethod
    async def create(self, *, notification: NotificationEntity) -> NotificationEntity:
        pass

    @abstractmethod
    async def get_by_id(self, *, notification_id: int) -> Optional[NotificationEntity]:
        pass

    @abstractmethod
    async def list_by_user_id(
        self, *, user_id: int, unread_only: bool = False
    ) -> List[NotificationEntity]:
        """Newest first"""
        pass

    @abstractmethod
    async def count_unread(self, *, user_id: int) -> int:
        pass

    @abstractmethod
    async def mark_as_read(self, *, notification_id: int) -> Optional[NotificationEntity]:
        pass

    @abstractmethod
    async def mark_all_as_read(self, *, user_id: int) -> int:
        """Returns the number of notifications that changed"""
        pass
