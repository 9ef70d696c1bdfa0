from typing import List, Optional

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_ticket_repo import ITicketRepo
from src.service.admission.domain.entity.ticket_entity import TicketEntity
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.driven_adapter.model.ticket_model import TicketModel


class TicketRepoImpl(ITicketRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_ticket: TicketModel) -> TicketEntity:
        return TicketEntity(
            id=db_ticket.id,
            event_id=db_ticket.event_id,
            user_id=db_ticket.user_id,
            ticket_type=db_ticket.ticket_type,
            qr_code=db_ticket.qr_code,
            price=db_ticket.price,
            status=TicketStatus(db_ticket.status),
            purchase_date=db_ticket.purchase_date,
        )

    async def _fetch_one(
        self, stmt: Select[tuple[TicketModel]], *, for_update: bool
    ) -> Optional[TicketEntity]:
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        db_ticket = result.scalar_one_or_none()
        return self._to_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def create(self, *, ticket: TicketEntity) -> TicketEntity:
        db_ticket = TicketModel(
            event_id=ticket.event_id,
            user_id=ticket.user_id,
            ticket_type=ticket.ticket_type,
            qr_code=ticket.qr_code,
            price=ticket.price,
            status=ticket.status.value,
            purchase_date=ticket.purchase_date,
        )
        self.session.add(db_ticket)
        await self.session.flush()
        return self._to_entity(db_ticket)

    @Logger.io
    async def get_by_id(self, *, ticket_id: int, for_update: bool = False) -> Optional[TicketEntity]:
        return await self._fetch_one(
            select(TicketModel).where(TicketModel.id == ticket_id), for_update=for_update
        )

    @Logger.io
    async def get_by_qr_code(
        self, *, qr_code: str, for_update: bool = False
    ) -> Optional[TicketEntity]:
        return await self._fetch_one(
            select(TicketModel).where(TicketModel.qr_code == qr_code), for_update=for_update
        )

    @Logger.io
    async def update_status(self, *, ticket_id: int, status: TicketStatus) -> None:
        await self.session.execute(
            update(TicketModel).where(TicketModel.id == ticket_id).values(status=status.value)
        )

    @Logger.io
    async def list_by_user_id(self, *, user_id: int) -> List[TicketEntity]:
        result = await self.session.execute(
            select(TicketModel)
            .where(TicketModel.user_id == user_id)
            .order_by(TicketModel.purchase_date, TicketModel.id)
        )
        return [self._to_entity(db_ticket) for db_ticket in result.scalars().all()]
