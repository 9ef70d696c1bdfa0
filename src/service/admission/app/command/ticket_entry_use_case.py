"""
Shared entry processing for every check-in path (QR scan, typed ticket
number, bulk list).

The ticket must already be held under its per-ticket lock by the caller's
unit of work, so exactly one concurrent scan can see it ACTIVE.
"""

from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.dto.scan_result import ScanResult
from src.service.admission.app.interface.i_notification_emitter import INotificationEmitter
from src.service.admission.domain.check_in_domain import decide_entry
from src.service.admission.domain.entity.event_entity import EventEntity
from src.service.admission.domain.entity.ticket_entity import TicketEntity
from src.service.admission.domain.enum.notification_type import NotificationType
from src.service.admission.domain.enum.scan_status import ScanStatus


class TicketEntryUseCase:
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

    async def _process_entry(
        self,
        *,
        uow: AbstractUnitOfWork,
        ticket: TicketEntity,
        gate: str,
        scanned_at: datetime,
        event: Optional[EventEntity] = None,
    ) -> ScanResult:
        ticket_id = ticket.persisted_id
        latest_log = await uow.attendance_log_repo.get_latest_by_ticket_id(ticket_id=ticket_id)
        decision = decide_entry(
            ticket=ticket, latest_log=latest_log, gate=gate, scanned_at=scanned_at
        )

        await uow.attendance_log_repo.create(attendance_log=decision.attendance_log)
        if decision.checked_in_ticket is not None:
            await uow.ticket_repo.update_status(
                ticket_id=ticket_id, status=decision.checked_in_ticket.status
            )
        else:
            Logger.base.info(
                f'🔁 [CHECK-IN] Ticket {ticket_id} re-entry #{decision.re_entry_count} at {gate}'
            )

        attendee = await uow.user_query_repo.get_by_id(user_id=ticket.user_id)
        if event is None:
            event = await uow.event_repo.get_by_id(event_id=ticket.event_id)

        return ScanResult.from_decision(
            decision=decision,
            ticket=ticket,
            attendee=attendee,
            event=event,
            gate=gate,
            scanned_at=scanned_at,
        )

    async def _notify_checked_in(self, *, result: ScanResult, user_id: int) -> None:
        # Duplicates never notify
        if result.status != ScanStatus.VALID:
            return
        event_title = result.event_title or 'the event'
        await self.notification_emitter.notify(
            user_id=user_id,
            kind=NotificationType.SUCCESS,
            title='Checked In',
            message=f"You've been checked in to \"{event_title}\" at {result.gate}. Enjoy the event!",
            related_event_id=result.event_id,
            related_ticket_id=result.ticket_id,
        )
