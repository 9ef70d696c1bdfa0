from abc import ABC, abstractmethod
from typing import Optional

from src.service.admission.domain.enum.notification_type import NotificationType


class INotificationEmitter(ABC):
    """
    Fire-and-forget notification port.

    Implementations must never raise: a failed delivery is logged and the
    booking or check-in that triggered it still stands.
    """

    @abstractmethod
    async def notify(
        self,
        *,
        user_id: int,
        kind: NotificationType,
        title: str,
        message: str,
        related_event_id: Optional[int] = None,
        related_ticket_id: Optional[int] = None,
    ) -> None:
        pass
