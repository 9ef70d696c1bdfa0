from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.admission.domain.entity.ticket_entity import TicketEntity
from src.service.admission.domain.enum.ticket_status import TicketStatus


class ITicketRepo(ABC):
    @abstractmethod
    async def create(self, *, ticket: TicketEntity) -> TicketEntity:
        """Persist a new ticket and return it with its id assigned"""
        pass

    @abstractmethod
    async def get_by_id(self, *, ticket_id: int, for_update: bool = False) -> Optional[TicketEntity]:
        pass

    @abstractmethod
    async def get_by_qr_code(
        self, *, qr_code: str, for_update: bool = False
    ) -> Optional[TicketEntity]:
        pass

    @abstractmethod
    async def update_status(self, *, ticket_id: int, status: TicketStatus) -> None:
        pass

    @abstractmethod
    async def list_by_user_id(self, *, user_id: int) -> List[TicketEntity]:
        pass
