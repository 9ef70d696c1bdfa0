from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.service.admission.domain.entity.notification_entity import NotificationEntity


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    type: str
    title: str
    message: str
    related_event_id: Optional[int] = None
    related_ticket_id: Optional[int] = None
    is_read: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: NotificationEntity) -> 'NotificationResponse':
        return cls(
            id=notification.id or 0,
            user_id=notification.user_id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            related_event_id=notification.related_event_id,
            related_ticket_id=notification.related_ticket_id,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class UnreadCountResponse(BaseModel):
    user_id: int
    unread_count: int


class MarkAllReadResponse(BaseModel):
    user_id: int
    updated: int
