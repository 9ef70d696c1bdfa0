"""
Event Repository Interface

Events are owned by another service; this port only exposes what admission
needs: reading an event (optionally under its row lock) and saving the sold
counter after an admission decision.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.admission.domain.entity.event_entity import EventEntity


class IEventRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int, for_update: bool = False) -> Optional[EventEntity]:
        """
        Args:
            for_update: Hold the event until the unit of work ends; required
                before reading `tickets_sold` for an admission decision
        """
        pass

    @abstractmethod
    async def update_tickets_sold(self, *, event: EventEntity) -> None:
        pass
