"""Unit tests for VerifyTicketByNumberUseCase"""

from datetime import datetime, timedelta, timezone
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from src.service.admission.app.command.scan_ticket_use_case import ScanTicketUseCase
from src.service.admission.app.command.verify_ticket_by_number_use_case import (
    VerifyTicketByNumberUseCase,
)
from src.service.admission.app.dto.scan_result import (
    MESSAGE_INVALID_NUMBER,
    MESSAGE_NO_EVENT,
    MESSAGE_NUMBER_NOT_FOUND,
    MESSAGE_WRONG_EVENT,
)
from src.service.admission.domain.enum.scan_status import ScanStatus
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.driven_adapter.memory.in_memory_database import InMemoryDatabase
from test.constants import CONCERT_EVENT_ID, CONCERT_EVENT_NAME, FREE_EVENT_ID, UNKNOWN_ID


@pytest.fixture
def use_case(
    uow_factory: Callable, mock_notification_emitter: AsyncMock
) -> VerifyTicketByNumberUseCase:
    return VerifyTicketByNumberUseCase(
        uow_factory=uow_factory, notification_emitter=mock_notification_emitter
    )


@pytest.mark.unit
class TestVerifyTicketByNumber:
    @pytest.mark.asyncio
    async def test_valid_number_checks_ticket_in(
        self,
        use_case: VerifyTicketByNumberUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
        mock_notification_emitter: AsyncMock,
    ) -> None:
        # Arrange
        ticket = issue_ticket(ticket_type='VIP')
        scanned_at = datetime(2030, 6, 1, 19, 5, tzinfo=timezone.utc)

        # Act
        result = await use_case.verify(
            ticket_number=ticket.ticket_number,
            event_id=CONCERT_EVENT_ID,
            gate='Gate C',
            scanned_at=scanned_at,
        )

        # Assert
        assert result.status == ScanStatus.VALID
        assert result.ticket_id == ticket.id
        assert result.event_title == CONCERT_EVENT_NAME
        assert result.scanned_at == scanned_at
        assert in_memory_database.tables['ticket'][ticket.id].status == TicketStatus.CHECKED_IN
        mock_notification_emitter.notify.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_prefix_does_not_matter(
        self, use_case: VerifyTicketByNumberUseCase, issue_ticket: Callable
    ) -> None:
        ticket = issue_ticket(ticket_type='VIP')

        result = await use_case.verify(ticket_number=f'regular-{ticket.id}')

        assert result.status == ScanStatus.VALID
        assert result.ticket_id == ticket.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize('ticket_number', [None, '', 'BOGUS', 'VIP-000000'])
    async def test_undecodable_number_is_invalid(
        self,
        use_case: VerifyTicketByNumberUseCase,
        in_memory_database: InMemoryDatabase,
        ticket_number: str | None,
    ) -> None:
        result = await use_case.verify(ticket_number=ticket_number)

        assert result.status == ScanStatus.INVALID
        assert result.message == MESSAGE_INVALID_NUMBER
        assert in_memory_database.tables['attendance_log'] == {}

    @pytest.mark.asyncio
    async def test_unknown_ticket_id_is_not_found(
        self, use_case: VerifyTicketByNumberUseCase, in_memory_database: InMemoryDatabase
    ) -> None:
        result = await use_case.verify(ticket_number='REGULAR-000999')

        assert result.status == ScanStatus.INVALID
        assert result.message == MESSAGE_NUMBER_NOT_FOUND
        assert in_memory_database.tables['attendance_log'] == {}

    @pytest.mark.asyncio
    async def test_ticket_for_another_event_is_rejected(
        self,
        use_case: VerifyTicketByNumberUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
        mock_notification_emitter: AsyncMock,
    ) -> None:
        ticket = issue_ticket(event_id=CONCERT_EVENT_ID)

        result = await use_case.verify(ticket_number=ticket.ticket_number, event_id=FREE_EVENT_ID)

        assert result.status == ScanStatus.INVALID
        assert result.message == MESSAGE_WRONG_EVENT
        assert in_memory_database.tables['ticket'][ticket.id].status == TicketStatus.ACTIVE
        assert in_memory_database.tables['attendance_log'] == {}
        mock_notification_emitter.notify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ticket_without_event_is_rejected(
        self,
        use_case: VerifyTicketByNumberUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
    ) -> None:
        ticket = issue_ticket(event_id=UNKNOWN_ID)

        result = await use_case.verify(ticket_number=ticket.ticket_number)

        assert result.status == ScanStatus.INVALID
        assert result.message == MESSAGE_NO_EVENT
        assert in_memory_database.tables['attendance_log'] == {}

    @pytest.mark.asyncio
    async def test_number_entry_after_qr_scan_is_duplicate(
        self,
        use_case: VerifyTicketByNumberUseCase,
        uow_factory: Callable,
        mock_notification_emitter: AsyncMock,
        issue_ticket: Callable,
    ) -> None:
        # Arrange: the same ticket was already scanned by QR at another gate
        ticket = issue_ticket()
        scan_use_case = ScanTicketUseCase(
            uow_factory=uow_factory, notification_emitter=mock_notification_emitter
        )
        first = await scan_use_case.scan(qr_code=ticket.qr_code, gate='Gate A')

        # Act
        result = await use_case.verify(ticket_number=ticket.ticket_number, gate='Gate B')

        # Assert
        assert first.status == ScanStatus.VALID
        assert result.status == ScanStatus.DUPLICATE
        assert result.re_entry_count == 1
        assert result.previous_scan_at == first.scanned_at

    @pytest.mark.asyncio
    async def test_re_entry_count_follows_write_order_not_timestamps(
        self,
        use_case: VerifyTicketByNumberUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
    ) -> None:
        # Arrange: the second scan carries an earlier timestamp than the first
        ticket = issue_ticket()
        first_at = datetime(2030, 6, 1, 19, 5, tzinfo=timezone.utc)
        late_arrival_at = first_at - timedelta(milliseconds=5)

        # Act
        first = await use_case.verify(ticket_number=ticket.ticket_number, scanned_at=first_at)
        second = await use_case.verify(
            ticket_number=ticket.ticket_number, scanned_at=late_arrival_at
        )
        third = await use_case.verify(ticket_number=ticket.ticket_number)

        # Assert
        assert [first.re_entry_count, second.re_entry_count, third.re_entry_count] == [0, 1, 2]
        assert [first.status, second.status, third.status] == [
            ScanStatus.VALID,
            ScanStatus.DUPLICATE,
            ScanStatus.DUPLICATE,
        ]
        assert second.previous_scan_at == first_at
        assert third.previous_scan_at == late_arrival_at
        logs = sorted(in_memory_database.tables['attendance_log'].values(), key=lambda log: log.id)
        assert [log.re_entry_count for log in logs] == [0, 1, 2]
