from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_notification_emitter import INotificationEmitter
from src.service.admission.app.interface.i_notification_repo import INotificationRepo
from src.service.admission.domain.entity.notification_entity import NotificationEntity
from src.service.admission.domain.enum.notification_type import NotificationType


class NotificationEmitterImpl(INotificationEmitter):
    """
    Delivers notifications to the user's in-app inbox.

    `Logger.io(reraise=False)` logs any storage failure and swallows it, so the
    booking or check-in that triggered the notification is never affected.
    """

    def __init__(self, *, notification_repo: INotificationRepo) -> None:
        self.notification_repo = notification_repo

    @Logger.io(reraise=False)
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
        notification = await self.notification_repo.create(
            notification=NotificationEntity(
                user_id=user_id,
                type=kind,
                title=title,
                message=message,
                related_event_id=related_event_id,
                related_ticket_id=related_ticket_id,
            )
        )
        Logger.base.info(f'🔔 [NOTIFY] {title} -> user {user_id} (notification {notification.id})')
