from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import attrs
import uuid_utils

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.domain.value_object.ticket_number import encode_ticket_number


@attrs.define
class TicketEntity:
    event_id: int
    user_id: int
    ticket_type: str
    qr_code: str
    price: Decimal
    status: TicketStatus
    purchase_date: datetime
    id: Optional[int] = None  # Only None before persistence

    @classmethod
    def issue(
        cls,
        *,
        event_id: int,
        user_id: int,
        ticket_type: str,
        price: Decimal,
        purchase_date: Optional[datetime] = None,
    ) -> 'TicketEntity':
        return cls(
            event_id=event_id,
            user_id=user_id,
            ticket_type=ticket_type,
            qr_code=str(uuid_utils.uuid4()),
            price=price,
            status=TicketStatus.ACTIVE,
            purchase_date=purchase_date or datetime.now(timezone.utc),
        )

    @property
    def ticket_number(self) -> Optional[str]:
        if self.id is None:
            return None
        return encode_ticket_number(self.id, self.ticket_type)

    @property
    def persisted_id(self) -> int:
        """
        Raises:
            DomainError: When the ticket has not been stored yet
        """
        if self.id is None:
            raise DomainError('Only persisted tickets can be scanned')
        return self.id

    @property
    def is_checked_in(self) -> bool:
        return self.status.is_checked_in

    @Logger.io
    def check_in(self) -> 'TicketEntity':
        """
        Raises:
            DomainError: When the ticket was already checked in (or marked used)
        """
        if self.is_checked_in:
            raise DomainError(f'Ticket {self.id} is already {self.status}')
        return attrs.evolve(self, status=TicketStatus.CHECKED_IN)
