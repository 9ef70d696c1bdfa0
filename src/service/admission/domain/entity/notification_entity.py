from datetime import datetime, timezone
from typing import Optional

import attrs

from src.service.admission.domain.enum.notification_type import NotificationType


@attrs.define
class NotificationEntity:
    user_id: int
    type: NotificationType
    title: str
    message: str
    related_event_id: Optional[int] = None
    related_ticket_id: Optional[int] = None
    is_read: bool = False
    created_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))
    id: Optional[int] = None

    def mark_as_read(self) -> 'NotificationEntity':
        return attrs.evolve(self, is_read=True)
