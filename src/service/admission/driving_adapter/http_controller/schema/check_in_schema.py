import re
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, field_validator

from src.service.admission.app.dto.bulk_check_in_summary import BulkCheckInSummary
from src.service.admission.app.dto.event_attendance_summary import EventAttendanceSummary
from src.service.admission.app.dto.scan_result import ScanResult
from src.service.admission.domain.entity.attendance_log_entity import AttendanceLogEntity


_SEPARATORS = re.compile(r'[,\r\n]+')


class ScanTicketRequest(BaseModel):
    qr_code: Optional[str] = None
    gate: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {'qr_code': '0b6c6a8e-2f0e-4c1b-9a57-2f1d3c4b5a69', 'gate': 'Gate A'}
        }


class VerifyTicketRequest(BaseModel):
    ticket_number: Optional[str] = None
    event_id: Optional[int] = None
    gate: Optional[str] = None

    class Config:
        json_schema_extra = {'example': {'ticket_number': 'VIP-000042', 'event_id': 1}}


class BulkCheckInRequest(BaseModel):
    """
    `ticket_numbers` accepts a list or one pasted string; entries are split on
    commas and newlines, trimmed, and blanks dropped. Repeats are kept so a
    ticket listed twice shows up as one valid and one duplicate.
    """

    ticket_numbers: List[str] = []
    gate: Optional[str] = None
    event_id: Optional[int] = None

    @field_validator('ticket_numbers', mode='before')
    @classmethod
    def split_ticket_numbers(cls, v: Union[str, List[str], None]) -> List[str]:
        if v is None:
            return []
        raw_items = [v] if isinstance(v, str) else v
        return [
            part.strip()
            for item in raw_items
            for part in _SEPARATORS.split(str(item))
            if part.strip()
        ]

    class Config:
        json_schema_extra = {
            'examples': [
                {'ticket_numbers': ['VIP-000042', 'REGULAR-000043'], 'gate': 'Gate B'},
                {'ticket_numbers': 'VIP-000042, REGULAR-000043\nREGULAR-000044'},
            ]
        }


class ScanResultResponse(BaseModel):
    status: str
    message: str
    ticket_id: Optional[int] = None
    event_id: Optional[int] = None
    ticket_number: Optional[str] = None
    attendee_name: Optional[str] = None
    attendee_email: Optional[str] = None
    event_title: Optional[str] = None
    event_start: Optional[datetime] = None
    event_end: Optional[datetime] = None
    gate: str
    re_entry_count: int
    already_checked_in: bool
    scanned_at: datetime
    previous_scan_at: Optional[datetime] = None

    @classmethod
    def from_result(cls, result: ScanResult) -> 'ScanResultResponse':
        return cls(
            status=result.status.value,
            message=result.message,
            ticket_id=result.ticket_id,
            event_id=result.event_id,
            ticket_number=result.ticket_number,
            attendee_name=result.attendee_name,
            attendee_email=result.attendee_email,
            event_title=result.event_title,
            event_start=result.event_start,
            event_end=result.event_end,
            gate=result.gate,
            re_entry_count=result.re_entry_count,
            already_checked_in=result.already_checked_in,
            scanned_at=result.scanned_at,
            previous_scan_at=result.previous_scan_at,
        )


class BulkCheckInResponse(BaseModel):
    total: int
    successful: int
    duplicate: int
    invalid: int
    results: List[ScanResultResponse]

    @classmethod
    def from_summary(cls, summary: BulkCheckInSummary) -> 'BulkCheckInResponse':
        return cls(
            total=summary.total,
            successful=summary.successful,
            duplicate=summary.duplicate,
            invalid=summary.invalid,
            results=[ScanResultResponse.from_result(result) for result in summary.results],
        )


class AttendanceLogResponse(BaseModel):
    id: int
    ticket_id: int
    user_id: int
    start_time: datetime
    gate: str
    status: str
    re_entry_count: int

    @classmethod
    def from_entity(cls, log: AttendanceLogEntity) -> 'AttendanceLogResponse':
        return cls(
            id=log.id or 0,
            ticket_id=log.ticket_id,
            user_id=log.user_id,
            start_time=log.start_time,
            gate=log.gate,
            status=log.status.value,
            re_entry_count=log.re_entry_count,
        )


class EventAttendanceResponse(BaseModel):
    event_id: int
    event_name: str
    capacity: int
    tickets_sold: int
    total_scans: int
    valid_entries: int
    duplicate_scans: int
    recent_scans: List[AttendanceLogResponse]

    @classmethod
    def from_summary(cls, summary: EventAttendanceSummary) -> 'EventAttendanceResponse':
        return cls(
            event_id=summary.event_id,
            event_name=summary.event_name,
            capacity=summary.capacity,
            tickets_sold=summary.tickets_sold,
            total_scans=summary.total_scans,
            valid_entries=summary.valid_entries,
            duplicate_scans=summary.duplicate_scans,
            recent_scans=[AttendanceLogResponse.from_entity(log) for log in summary.recent_scans],
        )
