from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.admission.domain.entity.ticket_entity import TicketEntity


class TicketQueryUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def get_ticket(self, *, ticket_id: int) -> TicketEntity:
        async with self.uow_factory() as uow:
            ticket = await uow.ticket_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')
        return ticket

    @Logger.io
    async def list_user_tickets(self, *, user_id: int) -> List[TicketEntity]:
        """Tickets in purchase order"""
        async with self.uow_factory() as uow:
            return await uow.ticket_repo.list_by_user_id(user_id=user_id)
