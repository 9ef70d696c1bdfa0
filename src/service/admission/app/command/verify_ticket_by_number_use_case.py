from datetime import datetime, timezone
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.ticket_entry_use_case import TicketEntryUseCase
from src.service.admission.app.dto.scan_result import (
    MESSAGE_INVALID_NUMBER,
    MESSAGE_NO_EVENT,
    MESSAGE_NUMBER_NOT_FOUND,
    MESSAGE_WRONG_EVENT,
    ScanResult,
)
from src.service.admission.domain.admission_defaults import resolve_gate
from src.service.admission.domain.value_object.ticket_number import decode_ticket_number


class VerifyTicketByNumberUseCase(TicketEntryUseCase):
    """
    Check a ticket in by its printed ticket number (manual entry at the gate).

    Rejections, all returned as `invalid` without touching state:
    - number cannot be decoded
    - no ticket with that id
    - the ticket's event no longer exists
    - `event_id` given and the ticket belongs to another event
    """

    @Logger.io
    async def verify(
        self,
        *,
        ticket_number: Optional[str],
        event_id: Optional[int] = None,
        gate: Optional[str] = None,
        scanned_at: Optional[datetime] = None,
    ) -> ScanResult:
        gate = resolve_gate(gate)
        scanned_at = scanned_at or datetime.now(timezone.utc)

        ticket_id = decode_ticket_number(ticket_number)
        if ticket_id is None:
            return ScanResult.invalid(
                message=MESSAGE_INVALID_NUMBER, gate=gate, scanned_at=scanned_at
            )

        with self.tracer.start_as_current_span(
            'use_case.verify_ticket_by_number',
            attributes={'ticket.id': ticket_id, 'gate': gate},
        ):
            async with self.uow_factory() as uow:
                ticket = await uow.ticket_repo.get_by_id(ticket_id=ticket_id, for_update=True)
                if not ticket:
                    return ScanResult.invalid(
                        message=MESSAGE_NUMBER_NOT_FOUND, gate=gate, scanned_at=scanned_at
                    )

                event = await uow.event_repo.get_by_id(event_id=ticket.event_id)
                if not event:
                    return ScanResult.invalid(
                        message=MESSAGE_NO_EVENT, gate=gate, scanned_at=scanned_at
                    )

                if event_id is not None and event_id != ticket.event_id:
                    Logger.base.info(
                        f'🚷 [VERIFY] Ticket {ticket_id} is for event {ticket.event_id}, '
                        f'scanned at event {event_id}'
                    )
                    return ScanResult.invalid(
                        message=MESSAGE_WRONG_EVENT, gate=gate, scanned_at=scanned_at
                    )

                result = await self._process_entry(
                    uow=uow, ticket=ticket, gate=gate, scanned_at=scanned_at, event=event
                )
                await uow.commit()

            await self._notify_checked_in(result=result, user_id=ticket.user_id)
            return result
