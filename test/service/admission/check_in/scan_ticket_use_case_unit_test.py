"""
Unit tests for ScanTicketUseCase

QR check-in against the in-memory backend: first entry, re-entries,
rejections that write nothing, and the single-winner guarantee under
concurrent scans of the same ticket.
"""

import asyncio
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from src.service.admission.app.command.scan_ticket_use_case import ScanTicketUseCase
from src.service.admission.app.dto.scan_result import (
    MESSAGE_BLANK_QR,
    MESSAGE_DUPLICATE,
    MESSAGE_UNKNOWN_QR,
    MESSAGE_VALID,
)
from src.service.admission.domain.enum.notification_type import NotificationType
from src.service.admission.domain.enum.scan_status import AttendanceStatus, ScanStatus
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.driven_adapter.memory.in_memory_database import InMemoryDatabase
from test.constants import (
    ATTENDEE_EMAIL,
    ATTENDEE_ID,
    ATTENDEE_NAME,
    CONCERT_EVENT_ID,
    CONCERT_EVENT_NAME,
    UNKNOWN_ID,
)


@pytest.fixture
def use_case(uow_factory: Callable, mock_notification_emitter: AsyncMock) -> ScanTicketUseCase:
    return ScanTicketUseCase(uow_factory=uow_factory, notification_emitter=mock_notification_emitter)


@pytest.mark.unit
class TestScanTicket:
    @pytest.mark.asyncio
    async def test_first_scan_checks_ticket_in(
        self,
        use_case: ScanTicketUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
        mock_notification_emitter: AsyncMock,
    ) -> None:
        # Arrange
        ticket = issue_ticket(ticket_type='VIP')

        # Act
        result = await use_case.scan(qr_code=ticket.qr_code, gate='Gate A')

        # Assert
        assert result.status == ScanStatus.VALID
        assert result.message == MESSAGE_VALID
        assert result.gate == 'Gate A'
        assert result.ticket_id == ticket.id
        assert result.event_id == CONCERT_EVENT_ID
        assert result.ticket_number == f'VIP-{ticket.id:06d}'
        assert result.attendee_name == ATTENDEE_NAME
        assert result.attendee_email == ATTENDEE_EMAIL
        assert result.event_title == CONCERT_EVENT_NAME
        assert result.event_start is not None
        assert result.re_entry_count == 0
        assert result.already_checked_in is False
        assert result.previous_scan_at is None

        assert in_memory_database.tables['ticket'][ticket.id].status == TicketStatus.CHECKED_IN
        (log,) = in_memory_database.tables['attendance_log'].values()
        assert log.status == AttendanceStatus.VALID
        assert log.gate == 'Gate A'
        assert log.start_time == result.scanned_at

        mock_notification_emitter.notify.assert_awaited_once_with(
            user_id=ATTENDEE_ID,
            kind=NotificationType.SUCCESS,
            title='Checked In',
            message=(
                f'You\'ve been checked in to "{CONCERT_EVENT_NAME}" at Gate A. Enjoy the event!'
            ),
            related_event_id=CONCERT_EVENT_ID,
            related_ticket_id=ticket.id,
        )

    @pytest.mark.asyncio
    async def test_repeated_scans_count_re_entries(
        self,
        use_case: ScanTicketUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
        mock_notification_emitter: AsyncMock,
    ) -> None:
        ticket = issue_ticket()

        first = await use_case.scan(qr_code=ticket.qr_code)
        second = await use_case.scan(qr_code=ticket.qr_code)
        third = await use_case.scan(qr_code=ticket.qr_code)

        assert first.status == ScanStatus.VALID
        assert second.status == ScanStatus.DUPLICATE
        assert second.message == MESSAGE_DUPLICATE
        assert second.already_checked_in is True
        assert second.re_entry_count == 1
        assert second.previous_scan_at == first.scanned_at
        assert third.re_entry_count == 2
        assert third.previous_scan_at == second.scanned_at

        logs = in_memory_database.tables['attendance_log'].values()
        assert [log.re_entry_count for log in logs] == [0, 1, 2]
        assert in_memory_database.tables['ticket'][ticket.id].status == TicketStatus.CHECKED_IN
        # Only the first entry notifies
        assert mock_notification_emitter.notify.await_count == 1

    @pytest.mark.asyncio
    async def test_used_ticket_is_a_duplicate_and_keeps_its_status(
        self,
        use_case: ScanTicketUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
    ) -> None:
        ticket = issue_ticket(status=TicketStatus.USED)

        result = await use_case.scan(qr_code=ticket.qr_code)

        assert result.status == ScanStatus.DUPLICATE
        assert result.re_entry_count == 1
        assert in_memory_database.tables['ticket'][ticket.id].status == TicketStatus.USED

    @pytest.mark.asyncio
    async def test_unknown_qr_code_writes_nothing(
        self,
        use_case: ScanTicketUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
        mock_notification_emitter: AsyncMock,
    ) -> None:
        issue_ticket()

        result = await use_case.scan(qr_code='not-a-real-code')

        assert result.status == ScanStatus.INVALID
        assert result.message == MESSAGE_UNKNOWN_QR
        assert result.ticket_id is None
        assert result.attendee_name is None
        assert in_memory_database.tables['attendance_log'] == {}
        mock_notification_emitter.notify.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('qr_code', [None, '', '   '])
    async def test_blank_qr_code_is_invalid(
        self,
        use_case: ScanTicketUseCase,
        in_memory_database: InMemoryDatabase,
        qr_code: str | None,
    ) -> None:
        result = await use_case.scan(qr_code=qr_code)

        assert result.status == ScanStatus.INVALID
        assert result.message == MESSAGE_BLANK_QR
        assert result.gate == 'Main Gate'
        assert in_memory_database.tables['attendance_log'] == {}

    @pytest.mark.asyncio
    async def test_qr_code_and_gate_are_trimmed(
        self, use_case: ScanTicketUseCase, issue_ticket: Callable
    ) -> None:
        ticket = issue_ticket()

        result = await use_case.scan(qr_code=f'  {ticket.qr_code}\n', gate='  North  ')

        assert result.status == ScanStatus.VALID
        assert result.gate == 'North'

    @pytest.mark.asyncio
    async def test_ticket_without_event_is_still_admitted(
        self,
        use_case: ScanTicketUseCase,
        issue_ticket: Callable,
        mock_notification_emitter: AsyncMock,
    ) -> None:
        ticket = issue_ticket(event_id=UNKNOWN_ID)

        result = await use_case.scan(qr_code=ticket.qr_code)

        assert result.status == ScanStatus.VALID
        assert result.event_id == UNKNOWN_ID
        assert result.event_title is None
        assert result.event_start is None
        message = mock_notification_emitter.notify.await_args.kwargs['message']
        assert message == 'You\'ve been checked in to "the event" at Main Gate. Enjoy the event!'


@pytest.mark.unit
class TestConcurrentScan:
    @pytest.fixture
    def racing_use_case(
        self, yielding_uow_factory: Callable, mock_notification_emitter: AsyncMock
    ) -> ScanTicketUseCase:
        return ScanTicketUseCase(
            uow_factory=yielding_uow_factory, notification_emitter=mock_notification_emitter
        )

    @pytest.mark.asyncio
    async def test_only_one_concurrent_scan_is_valid(
        self,
        racing_use_case: ScanTicketUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
        mock_notification_emitter: AsyncMock,
    ) -> None:
        # Arrange
        ticket = issue_ticket()

        # Act
        results = await asyncio.gather(
            *(racing_use_case.scan(qr_code=ticket.qr_code, gate=f'Gate {n}') for n in range(5))
        )

        # Assert
        statuses = [r.status for r in results]
        assert statuses.count(ScanStatus.VALID) == 1
        assert statuses.count(ScanStatus.DUPLICATE) == 4
        assert sorted(r.re_entry_count for r in results) == [0, 1, 2, 3, 4]
        assert len(in_memory_database.tables['attendance_log']) == 5
        assert mock_notification_emitter.notify.await_count == 1

    @pytest.mark.asyncio
    async def test_race_admits_twice_when_ticket_lock_is_disabled(
        self,
        racing_use_case: ScanTicketUseCase,
        issue_ticket: Callable,
        without_keyed_locks: None,
    ) -> None:
        # Arrange
        ticket = issue_ticket()

        # Act
        results = await asyncio.gather(
            *(racing_use_case.scan(qr_code=ticket.qr_code, gate=f'Gate {n}') for n in range(5))
        )

        # Assert: every scanner saw the ticket still ACTIVE
        statuses = [r.status for r in results]
        assert statuses.count(ScanStatus.VALID) > 1
