from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs


@attrs.define
class EventEntity:
    """
    Event as seen by the admission service.

    Event CRUD is owned elsewhere; this service only reads the event and moves
    `tickets_sold` through the capacity ledger.
    """

    id: int
    name: str
    capacity: int
    tickets_sold: int = 0
    ticket_price: Decimal = Decimal('0')
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.tickets_sold, 0)
