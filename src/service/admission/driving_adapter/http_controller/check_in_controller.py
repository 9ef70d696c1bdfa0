"""
Gate-facing endpoints.

Scan and verify always answer 200 with a ScanResult, including for unknown
or malformed tickets; only request-shape errors produce 4xx.
"""

from fastapi import APIRouter, Depends
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.bulk_check_in_use_case import BulkCheckInUseCase
from src.service.admission.app.command.scan_ticket_use_case import ScanTicketUseCase
from src.service.admission.app.command.verify_ticket_by_number_use_case import (
    VerifyTicketByNumberUseCase,
)
from src.service.admission.app.query.get_event_attendance_use_case import (
    GetEventAttendanceUseCase,
)
from src.service.admission.driving_adapter.http_controller.schema.check_in_schema import (
    BulkCheckInRequest,
    BulkCheckInResponse,
    EventAttendanceResponse,
    ScanResultResponse,
    ScanTicketRequest,
    VerifyTicketRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/scan')
@Logger.io
async def scan_ticket(
    request: ScanTicketRequest,
    use_case: ScanTicketUseCase = Depends(ScanTicketUseCase.depends),
) -> ScanResultResponse:
    result = await use_case.scan(qr_code=request.qr_code, gate=request.gate)
    return ScanResultResponse.from_result(result)


@router.post('/verify')
@Logger.io
async def verify_ticket_by_number(
    request: VerifyTicketRequest,
    use_case: VerifyTicketByNumberUseCase = Depends(VerifyTicketByNumberUseCase.depends),
) -> ScanResultResponse:
    result = await use_case.verify(
        ticket_number=request.ticket_number, event_id=request.event_id, gate=request.gate
    )
    return ScanResultResponse.from_result(result)


@router.post('/bulk')
@Logger.io
async def bulk_check_in(
    request: BulkCheckInRequest,
    use_case: BulkCheckInUseCase = Depends(BulkCheckInUseCase.depends),
) -> BulkCheckInResponse:
    with tracer.start_as_current_span('controller.bulk_check_in') as span:
        span.set_attribute('bulk.size', len(request.ticket_numbers))
        summary = await use_case.check_in(
            ticket_numbers=request.ticket_numbers, gate=request.gate, event_id=request.event_id
        )
        return BulkCheckInResponse.from_summary(summary)


@router.get('/event/{event_id}/attendance')
@Logger.io
async def get_event_attendance(
    event_id: int,
    use_case: GetEventAttendanceUseCase = Depends(GetEventAttendanceUseCase.depends),
) -> EventAttendanceResponse:
    summary = await use_case.get_attendance(event_id=event_id)
    return EventAttendanceResponse.from_summary(summary)
