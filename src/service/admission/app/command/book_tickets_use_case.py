from decimal import Decimal
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_notification_emitter import INotificationEmitter
from src.service.admission.domain.admission_defaults import (
    resolve_payment_method,
    resolve_quantity,
    resolve_ticket_type,
    resolve_unit_price,
)
from src.service.admission.domain.capacity_ledger import CapacityLedger
from src.service.admission.domain.entity.payment_entity import PaymentEntity
from src.service.admission.domain.entity.ticket_entity import TicketEntity
from src.service.admission.domain.enum.notification_type import NotificationType


def build_purchase_message(*, quantity: int, ticket_type: str, event_name: str) -> str:
    noun, verb = ('ticket', 'has') if quantity == 1 else ('tickets', 'have')
    return f'Your {quantity} {ticket_type} {noun} for "{event_name}" {verb} been confirmed!'


class BookTicketsUseCase:
    """
    Issue tickets against an event's capacity.

    Flow (one unit of work):
    1. Resolve defaults (quantity floor 1, REGULAR, GCASH)
    2. Load the user, then the event under its row lock
    3. CapacityLedger admits the quantity and advances tickets_sold
    4. Create `quantity` ACTIVE tickets, each with its own QR token
    5. Record one COMPLETED payment when the total is above zero
    6. Commit, then notify the buyer

    Any failure before commit leaves no tickets, no payment and the sold
    counter untouched.
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        notification_emitter: INotificationEmitter,
    ) -> None:
        self.uow_factory = uow_factory
        self.notification_emitter = notification_emitter
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
        notification_emitter: INotificationEmitter = Depends(
            Provide[Container.notification_emitter]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory, notification_emitter=notification_emitter)

    @Logger.io
    async def book(
        self,
        *,
        event_id: int,
        user_id: int,
        quantity: Optional[int] = 1,
        ticket_type: Optional[str] = None,
        ticket_price: Optional[Decimal] = None,
        payment_method: Optional[str] = None,
    ) -> List[TicketEntity]:
        """
        Raises:
            NotFoundError: User or event does not exist
            CapacityExceededError: tickets_sold + quantity would pass capacity
        """
        quantity = resolve_quantity(quantity)
        ticket_type = resolve_ticket_type(ticket_type)
        payment_method = resolve_payment_method(payment_method)

        with self.tracer.start_as_current_span(
            'use_case.book_tickets',
            attributes={'event.id': event_id, 'user.id': user_id, 'booking.quantity': quantity},
        ):
            async with self.uow_factory() as uow:
                user = await uow.user_query_repo.get_by_id(user_id=user_id)
                if not user:
                    raise NotFoundError('User not found')

                event = await uow.event_repo.get_by_id(event_id=event_id, for_update=True)
                if not event:
                    raise NotFoundError('Event not found')

                admitted_event = CapacityLedger.admit(event=event, quantity=quantity)
                await uow.event_repo.update_tickets_sold(event=admitted_event)

                unit_price = resolve_unit_price(override=ticket_price, event_price=event.ticket_price)
                tickets: List[TicketEntity] = []
                for _ in range(quantity):
                    ticket = await uow.ticket_repo.create(
                        ticket=TicketEntity.issue(
                            event_id=event_id,
                            user_id=user_id,
                            ticket_type=ticket_type,
                            price=unit_price,
                        )
                    )
                    tickets.append(ticket)

                total = unit_price * quantity
                if total > 0:
                    await uow.payment_recorder.save(
                        payment=PaymentEntity.completed(
                            user_id=user_id,
                            event_id=event_id,
                            amount=total,
                            payment_method=payment_method,
                        )
                    )

                await uow.commit()

            Logger.base.info(
                f'🎟️ [BOOK] Event {event_id}: user {user_id} booked {quantity} {ticket_type} '
                f'({admitted_event.tickets_sold}/{admitted_event.capacity} sold)'
            )

            await self.notification_emitter.notify(
                user_id=user_id,
                kind=NotificationType.SUCCESS,
                title='Ticket Purchased',
                message=build_purchase_message(
                    quantity=quantity, ticket_type=ticket_type, event_name=event.name
                ),
                related_event_id=event_id,
            )
            return tickets
