"""Unit tests for BulkCheckInUseCase"""

from datetime import datetime, timezone
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from src.service.admission.app.command.bulk_check_in_use_case import (
    MESSAGE_PROCESSING_FAILED,
    BulkCheckInUseCase,
)
from src.service.admission.app.command.verify_ticket_by_number_use_case import (
    VerifyTicketByNumberUseCase,
)
from src.service.admission.app.dto.scan_result import MESSAGE_INVALID_NUMBER, ScanResult
from src.service.admission.domain.enum.scan_status import ScanStatus
from src.service.admission.driven_adapter.memory.in_memory_database import InMemoryDatabase
from test.constants import CONCERT_EVENT_ID


@pytest.fixture
def use_case(uow_factory: Callable, mock_notification_emitter: AsyncMock) -> BulkCheckInUseCase:
    return BulkCheckInUseCase(
        verify_use_case=VerifyTicketByNumberUseCase(
            uow_factory=uow_factory, notification_emitter=mock_notification_emitter
        )
    )


@pytest.mark.unit
class TestBulkCheckIn:
    @pytest.mark.asyncio
    async def test_mixed_batch_is_summarized_in_input_order(
        self,
        use_case: BulkCheckInUseCase,
        issue_ticket: Callable,
        in_memory_database: InMemoryDatabase,
    ) -> None:
        # Arrange
        ticket = issue_ticket()
        assert ticket.id == 1

        # Act
        summary = await use_case.check_in(
            ticket_numbers=['T-000001', 'BOGUS', 'T-000001'], gate='Gate D'
        )

        # Assert
        assert (summary.total, summary.successful, summary.duplicate, summary.invalid) == (
            3,
            1,
            1,
            1,
        )
        assert [r.status for r in summary.results] == [
            ScanStatus.VALID,
            ScanStatus.INVALID,
            ScanStatus.DUPLICATE,
        ]
        assert summary.results[1].message == MESSAGE_INVALID_NUMBER
        assert all(r.gate == 'Gate D' for r in summary.results)
        assert len(in_memory_database.tables['attendance_log']) == 2

    @pytest.mark.asyncio
    async def test_empty_batch_returns_zero_summary(self, use_case: BulkCheckInUseCase) -> None:
        summary = await use_case.check_in(ticket_numbers=[])

        assert (summary.total, summary.successful, summary.duplicate, summary.invalid) == (
            0,
            0,
            0,
            0,
        )
        assert summary.results == []

    @pytest.mark.asyncio
    async def test_event_filter_applies_to_every_item(
        self, use_case: BulkCheckInUseCase, issue_ticket: Callable
    ) -> None:
        ours = issue_ticket(event_id=CONCERT_EVENT_ID)
        other = issue_ticket(event_id=2)

        summary = await use_case.check_in(
            ticket_numbers=[ours.ticket_number, other.ticket_number], event_id=CONCERT_EVENT_ID
        )

        assert summary.successful == 1
        assert summary.invalid == 1

    @pytest.mark.asyncio
    async def test_failing_item_does_not_stop_the_batch(self) -> None:
        # Arrange
        now = datetime.now(timezone.utc)
        verify_use_case = AsyncMock(spec=VerifyTicketByNumberUseCase)
        verify_use_case.verify.side_effect = [
            ScanResult(status=ScanStatus.VALID, message='ok', gate='Main Gate', scanned_at=now),
            RuntimeError('storage unavailable'),
            ScanResult(status=ScanStatus.VALID, message='ok', gate='Main Gate', scanned_at=now),
        ]
        use_case = BulkCheckInUseCase(verify_use_case=verify_use_case)

        # Act
        summary = await use_case.check_in(ticket_numbers=['A-1', 'A-2', 'A-3'])

        # Assert
        assert verify_use_case.verify.await_count == 3
        assert summary.successful == 2
        assert summary.invalid == 1
        assert summary.results[1].message == MESSAGE_PROCESSING_FAILED
        assert summary.results[1].gate == 'Main Gate'
