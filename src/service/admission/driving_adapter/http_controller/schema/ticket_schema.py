from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.admission.domain.entity.ticket_entity import TicketEntity


class BookTicketsRequest(BaseModel):
    event_id: int
    user_id: int
    quantity: int = 1  # Values below 1 are clamped to 1
    ticket_type: Optional[str] = None
    ticket_price: Optional[Decimal] = Field(default=None, ge=0)
    payment_method: Optional[str] = None

    class Config:
        json_schema_extra = {
            'examples': [
                {'event_id': 1, 'user_id': 1, 'quantity': 2, 'ticket_type': 'VIP'},
                {'event_id': 1, 'user_id': 1},
            ]
        }


class TicketResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 42,
                'ticket_number': 'VIP-000042',
                'event_id': 1,
                'user_id': 1,
                'ticket_type': 'VIP',
                'qr_code': '0b6c6a8e-2f0e-4c1b-9a57-2f1d3c4b5a69',
                'price': '500.00',
                'status': 'ACTIVE',
                'purchase_date': '2025-01-10T10:30:00Z',
            }
        },
    }

    id: int
    ticket_number: str
    event_id: int
    user_id: int
    ticket_type: str
    qr_code: str
    price: Decimal
    status: str
    purchase_date: datetime

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'TicketResponse':
        return cls(
            id=ticket.id or 0,
            ticket_number=ticket.ticket_number or '',
            event_id=ticket.event_id,
            user_id=ticket.user_id,
            ticket_type=ticket.ticket_type,
            qr_code=ticket.qr_code,
            price=ticket.price,
            status=ticket.status.value,
            purchase_date=ticket.purchase_date,
        )


class BookTicketsResponse(BaseModel):
    quantity: int
    tickets: List[TicketResponse]
