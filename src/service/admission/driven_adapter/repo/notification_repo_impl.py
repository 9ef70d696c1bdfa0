"""
Notification Repository (PostgreSQL)

Runs outside the booking/check-in unit of work: every call opens its own
short-lived session and commits immediately.
"""

from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_notification_repo import INotificationRepo
from src.service.admission.domain.entity.notification_entity import NotificationEntity
from src.service.admission.domain.enum.notification_type import NotificationType
from src.service.admission.driven_adapter.model.notification_model import NotificationModel


class NotificationRepoImpl(INotificationRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(db_notification: NotificationModel) -> NotificationEntity:
        return NotificationEntity(
            id=db_notification.id,
            user_id=db_notification.user_id,
            type=NotificationType(db_notification.type),
            title=db_notification.title,
            message=db_notification.message,
            related_event_id=db_notification.related_event_id,
            related_ticket_id=db_notification.related_ticket_id,
            is_read=db_notification.is_read,
            created_at=db_notification.created_at,
        )

    @Logger.io
    async def create(self, *, notification: NotificationEntity) -> NotificationEntity:
        async with self.session_factory() as session:
            db_notification = NotificationModel(
                user_id=notification.user_id,
                type=notification.type.value,
                title=notification.title,
                message=notification.message,
                related_event_id=notification.related_event_id,
                related_ticket_id=notification.related_ticket_id,
                is_read=notification.is_read,
                created_at=notification.created_at,
            )
            session.add(db_notification)
            await session.commit()
            await session.refresh(db_notification)
            return self._to_entity(db_notification)

    @Logger.io
    async def get_by_id(self, *, notification_id: int) -> Optional[NotificationEntity]:
        async with self.session_factory() as session:
            db_notification = await session.get(NotificationModel, notification_id)
            return self._to_entity(db_notification) if db_notification else None

    @Logger.io
    async def list_by_user_id(
        self, *, user_id: int, unread_only: bool = False
    ) -> List[NotificationEntity]:
        async with self.session_factory() as session:
            stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
            if unread_only:
                stmt = stmt.where(NotificationModel.is_read.is_(False))
            stmt = stmt.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def count_unread(self, *, user_id: int) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                select(func.count(NotificationModel.id)).where(
                    NotificationModel.user_id == user_id,
                    NotificationModel.is_read.is_(False),
                )
            )
            return result.scalar_one()

    @Logger.io
    async def mark_as_read(self, *, notification_id: int) -> Optional[NotificationEntity]:
        async with self.session_factory() as session:
            db_notification = await session.get(NotificationModel, notification_id)
            if not db_notification:
                return None
            db_notification.is_read = True
            await session.commit()
            return self._to_entity(db_notification)

    @Logger.io
    async def mark_all_as_read(self, *, user_id: int) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                update(NotificationModel)
                .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
                .values(is_read=True)
            )
            await session.commit()
            return result.rowcount or 0
