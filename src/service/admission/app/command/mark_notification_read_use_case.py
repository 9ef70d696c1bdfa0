from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_notification_repo import INotificationRepo
from src.service.admission.domain.entity.notification_entity import NotificationEntity


class MarkNotificationReadUseCase:
    def __init__(self, *, notification_repo: INotificationRepo) -> None:
        self.notification_repo = notification_repo

    @classmethod
    @inject
    def depends(
        cls,
        notification_repo: INotificationRepo = Depends(Provide[Container.notification_repo]),
    ) -> Self:
        return cls(notification_repo=notification_repo)

    @Logger.io
    async def mark_as_read(self, *, notification_id: int) -> NotificationEntity:
        notification = await self.notification_repo.mark_as_read(notification_id=notification_id)
        if not notification:
            raise NotFoundError('Notification not found')
        return notification

    @Logger.io
    async def mark_all_as_read(self, *, user_id: int) -> int:
        updated = await self.notification_repo.mark_all_as_read(user_id=user_id)
        Logger.base.info(f'📭 [NOTIFY] Marked {updated} notifications read for user {user_id}')
        return updated
