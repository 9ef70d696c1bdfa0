from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_notification_repo import INotificationRepo
from src.service.admission.domain.entity.notification_entity import NotificationEntity


class ListNotificationsUseCase:
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
    async def list_notifications(
        self, *, user_id: int, unread_only: bool = False
    ) -> List[NotificationEntity]:
        return await self.notification_repo.list_by_user_id(
            user_id=user_id, unread_only=unread_only
        )

    @Logger.io
    async def count_unread(self, *, user_id: int) -> int:
        return await self.notification_repo.count_unread(user_id=user_id)
