"""
In-memory repositories

All of them read and write through an InMemoryUnitOfWork. A `for_update`
read takes the same per-entity key the PostgreSQL adapter would row-lock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_attendance_log_repo import IAttendanceLogRepo
from src.service.admission.app.interface.i_event_repo import IEventRepo
from src.service.admission.app.interface.i_payment_recorder import IPaymentRecorder
from src.service.admission.app.interface.i_ticket_repo import ITicketRepo
from src.service.admission.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.admission.domain.entity.attendance_log_entity import AttendanceLogEntity
from src.service.admission.domain.entity.event_entity import EventEntity
from src.service.admission.domain.entity.payment_entity import PaymentEntity
from src.service.admission.domain.entity.ticket_entity import TicketEntity
from src.service.admission.domain.entity.user_entity import UserEntity
from src.service.admission.domain.enum.scan_status import AttendanceStatus
from src.service.admission.domain.enum.ticket_status import TicketStatus


if TYPE_CHECKING:
    from src.service.admission.driven_adapter.memory.in_memory_unit_of_work import (
        InMemoryUnitOfWork,
    )


def event_lock_key(event_id: int) -> str:
    return f'event:{event_id}'


def ticket_lock_key(ticket_id: int) -> str:
    return f'ticket:{ticket_id}'


class InMemoryUserQueryRepo(IUserQueryRepo):
    def __init__(self, *, uow: InMemoryUnitOfWork) -> None:
        self.uow = uow

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[UserEntity]:
        return self.uow.get('user', user_id)


class InMemoryEventRepo(IEventRepo):
    def __init__(self, *, uow: InMemoryUnitOfWork) -> None:
        self.uow = uow

    @Logger.io
    async def get_by_id(self, *, event_id: int, for_update: bool = False) -> Optional[EventEntity]:
        if for_update:
            await self.uow.lock(event_lock_key(event_id))
        return self.uow.get('event', event_id)

    @Logger.io
    async def update_tickets_sold(self, *, event: EventEntity) -> None:
        current = self.uow.get('event', event.id)
        if current is None:
            return
        self.uow.stage('event', event.id, attrs.evolve(current, tickets_sold=event.tickets_sold))


class InMemoryTicketRepo(ITicketRepo):
    def __init__(self, *, uow: InMemoryUnitOfWork) -> None:
        self.uow = uow

    @Logger.io
    async def create(self, *, ticket: TicketEntity) -> TicketEntity:
        created = attrs.evolve(ticket, id=self.uow.database.next_id('ticket'))
        self.uow.stage('ticket', created.id, created)  # type: ignore[arg-type]
        return created

    @Logger.io
    async def get_by_id(self, *, ticket_id: int, for_update: bool = False) -> Optional[TicketEntity]:
        if for_update:
            await self.uow.lock(ticket_lock_key(ticket_id))
        return self.uow.get('ticket', ticket_id)

    @Logger.io
    async def get_by_qr_code(
        self, *, qr_code: str, for_update: bool = False
    ) -> Optional[TicketEntity]:
        ticket = next((t for t in self.uow.rows('ticket') if t.qr_code == qr_code), None)
        if ticket is None or not for_update:
            return ticket
        # Re-read under the lock, another scan may have checked it in meanwhile
        await self.uow.lock(ticket_lock_key(ticket.id))
        return self.uow.get('ticket', ticket.id)

    @Logger.io
    async def update_status(self, *, ticket_id: int, status: TicketStatus) -> None:
        current = self.uow.get('ticket', ticket_id)
        if current is None:
            return
        self.uow.stage('ticket', ticket_id, attrs.evolve(current, status=status))

    @Logger.io
    async def list_by_user_id(self, *, user_id: int) -> List[TicketEntity]:
        tickets = [t for t in self.uow.rows('ticket') if t.user_id == user_id]
        return sorted(tickets, key=lambda t: (t.purchase_date, t.id))


class InMemoryAttendanceLogRepo(IAttendanceLogRepo):
    def __init__(self, *, uow: InMemoryUnitOfWork) -> None:
        self.uow = uow

    def _newest_first(self, *, event_id: Optional[int] = None, ticket_id: Optional[int] = None):
        logs = [
            log
            for log in self.uow.rows('attendance_log')
            if (event_id is None or log.event_id == event_id)
            and (ticket_id is None or log.ticket_id == ticket_id)
        ]
        return sorted(logs, key=lambda log: (log.start_time, log.id), reverse=True)

    @Logger.io
    async def create(self, *, attendance_log: AttendanceLogEntity) -> AttendanceLogEntity:
        created = attrs.evolve(attendance_log, id=self.uow.database.next_id('attendance_log'))
        self.uow.stage('attendance_log', created.id, created)  # type: ignore[arg-type]
        return created

    @Logger.io
    async def get_latest_by_ticket_id(self, *, ticket_id: int) -> Optional[AttendanceLogEntity]:
        # Most recently written log, scan timestamps can arrive out of order
        logs = [log for log in self.uow.rows('attendance_log') if log.ticket_id == ticket_id]
        return max(logs, key=lambda log: log.id, default=None)

    @Logger.io
    async def count_by_event_id(self, *, event_id: int) -> int:
        return len(self._newest_first(event_id=event_id))

    @Logger.io
    async def count_by_event_id_and_status(
        self, *, event_id: int, status: AttendanceStatus
    ) -> int:
        return sum(1 for log in self._newest_first(event_id=event_id) if log.status == status)

    @Logger.io
    async def list_recent_by_event_id(
        self, *, event_id: int, limit: int = 25
    ) -> List[AttendanceLogEntity]:
        return self._newest_first(event_id=event_id)[:limit]


class InMemoryPaymentRecorder(IPaymentRecorder):
    def __init__(self, *, uow: InMemoryUnitOfWork) -> None:
        self.uow = uow

    @Logger.io
    async def save(self, *, payment: PaymentEntity) -> PaymentEntity:
        saved = attrs.evolve(payment, id=self.uow.database.next_id('payment'))
        self.uow.stage('payment', saved.id, saved)  # type: ignore[arg-type]
        return saved
