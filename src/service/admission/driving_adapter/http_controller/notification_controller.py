from typing import List

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.mark_notification_read_use_case import (
    MarkNotificationReadUseCase,
)
from src.service.admission.app.query.list_notifications_use_case import (
    ListNotificationsUseCase,
)
from src.service.admission.driving_adapter.http_controller.schema.notification_schema import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)


router = APIRouter()


@router.get('/user/{user_id}')
@Logger.io
async def list_notifications(
    user_id: int,
    unread_only: bool = False,
    use_case: ListNotificationsUseCase = Depends(ListNotificationsUseCase.depends),
) -> List[NotificationResponse]:
    notifications = await use_case.list_notifications(user_id=user_id, unread_only=unread_only)
    return [NotificationResponse.from_entity(n) for n in notifications]


@router.get('/user/{user_id}/unread_count')
@Logger.io
async def count_unread(
    user_id: int,
    use_case: ListNotificationsUseCase = Depends(ListNotificationsUseCase.depends),
) -> UnreadCountResponse:
    return UnreadCountResponse(
        user_id=user_id, unread_count=await use_case.count_unread(user_id=user_id)
    )


@router.patch('/user/{user_id}/read_all')
@Logger.io
async def mark_all_as_read(
    user_id: int,
    use_case: MarkNotificationReadUseCase = Depends(MarkNotificationReadUseCase.depends),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(
        user_id=user_id, updated=await use_case.mark_all_as_read(user_id=user_id)
    )


@router.patch('/{notification_id}/read')
@Logger.io
async def mark_as_read(
    notification_id: int,
    use_case: MarkNotificationReadUseCase = Depends(MarkNotificationReadUseCase.depends),
) -> NotificationResponse:
    notification = await use_case.mark_as_read(notification_id=notification_id)
    return NotificationResponse.from_entity(notification)
