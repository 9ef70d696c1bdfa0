from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_event_repo import IEventRepo
from src.service.admission.domain.entity.event_entity import EventEntity
from src.service.admission.driven_adapter.model.event_model import EventModel


class EventRepoImpl(IEventRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_event: EventModel) -> EventEntity:
        return EventEntity(
            id=db_event.id,
            name=db_event.name,
            location=db_event.location,
            start_date=db_event.start_date,
            end_date=db_event.end_date,
            capacity=db_event.capacity,
            tickets_sold=db_event.tickets_sold,
            ticket_price=db_event.ticket_price,
        )

    @Logger.io
    async def get_by_id(self, *, event_id: int, for_update: bool = False) -> Optional[EventEntity]:
        stmt = select(EventModel).where(EventModel.id == event_id)
        if for_update:
            # Row lock held until the UoW commits or rolls back
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        db_event = result.scalar_one_or_none()
        return self._to_entity(db_event) if db_event else None

    @Logger.io
    async def update_tickets_sold(self, *, event: EventEntity) -> None:
        await self.session.execute(
            update(EventModel)
            .where(EventModel.id == event.id)
            .values(tickets_sold=event.tickets_sold)
        )
