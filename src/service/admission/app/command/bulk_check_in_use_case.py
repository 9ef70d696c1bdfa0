from datetime import datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.verify_ticket_by_number_use_case import (
    VerifyTicketByNumberUseCase,
)
from src.service.admission.app.dto.bulk_check_in_summary import BulkCheckInSummary
from src.service.admission.app.dto.scan_result import ScanResult
from src.service.admission.app.interface.i_notification_emitter import INotificationEmitter
from src.service.admission.domain.admission_defaults import resolve_gate


MESSAGE_PROCESSING_FAILED = 'Ticket could not be processed.'


class BulkCheckInUseCase:
    """
    Check in a list of ticket numbers, one at a time.

    Every item runs through VerifyTicketByNumberUseCase in its own unit of
    work with its own timestamp. Items already processed stay committed
    whatever happens to later ones.
    """

    def __init__(self, *, verify_use_case: VerifyTicketByNumberUseCase) -> None:
        self.verify_use_case = verify_use_case
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
        return cls(
            verify_use_case=VerifyTicketByNumberUseCase(
                uow_factory=uow_factory, notification_emitter=notification_emitter
            )
        )

    @Logger.io
    async def check_in(
        self,
        *,
        ticket_numbers: List[str],
        gate: Optional[str] = None,
        event_id: Optional[int] = None,
    ) -> BulkCheckInSummary:
        if not ticket_numbers:
            return BulkCheckInSummary.from_results([])

        gate = resolve_gate(gate)
        results: List[ScanResult] = []
        with self.tracer.start_as_current_span(
            'use_case.bulk_check_in',
            attributes={'bulk.size': len(ticket_numbers), 'gate': gate},
        ):
            for ticket_number in ticket_numbers:
                scanned_at = datetime.now(timezone.utc)
                try:
                    result = await self.verify_use_case.verify(
                        ticket_number=ticket_number,
                        event_id=event_id,
                        gate=gate,
                        scanned_at=scanned_at,
                    )
                except Exception as e:
                    # Storage failure on one item; already committed items stand
                    Logger.base.error(f'💥 [BULK] {ticket_number!r} failed: {e}')
                    result = ScanResult.invalid(
                        message=MESSAGE_PROCESSING_FAILED, gate=gate, scanned_at=scanned_at
                    )
                results.append(result)

            summary = BulkCheckInSummary.from_results(results)
            Logger.base.info(
                f'📦 [BULK] {summary.total} processed at {gate}: {summary.successful} valid, '
                f'{summary.duplicate} duplicate, {summary.invalid} invalid'
            )
            return summary
