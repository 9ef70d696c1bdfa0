from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.book_tickets_use_case import BookTicketsUseCase
from src.service.admission.app.query.ticket_query_use_case import TicketQueryUseCase
from src.service.admission.driving_adapter.http_controller.schema.ticket_schema import (
    BookTicketsRequest,
    BookTicketsResponse,
    TicketResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/book', status_code=status.HTTP_201_CREATED)
@Logger.io
async def book_tickets(
    request: BookTicketsRequest,
    use_case: BookTicketsUseCase = Depends(BookTicketsUseCase.depends),
) -> BookTicketsResponse:
    with tracer.start_as_current_span('controller.book_tickets') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('user_id', request.user_id)

        tickets = await use_case.book(
            event_id=request.event_id,
            user_id=request.user_id,
            quantity=request.quantity,
            ticket_type=request.ticket_type,
            ticket_price=request.ticket_price,
            payment_method=request.payment_method,
        )
        return BookTicketsResponse(
            quantity=len(tickets),
            tickets=[TicketResponse.from_entity(ticket) for ticket in tickets],
        )


@router.get('/user/{user_id}')
@Logger.io
async def list_user_tickets(
    user_id: int,
    use_case: TicketQueryUseCase = Depends(TicketQueryUseCase.depends),
) -> List[TicketResponse]:
    tickets = await use_case.list_user_tickets(user_id=user_id)
    return [TicketResponse.from_entity(ticket) for ticket in tickets]


@router.get('/{ticket_id}')
@Logger.io
async def get_ticket(
    ticket_id: int,
    use_case: TicketQueryUseCase = Depends(TicketQueryUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.get_ticket(ticket_id=ticket_id)
    return TicketResponse.from_entity(ticket)
