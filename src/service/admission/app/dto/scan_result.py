"""Scan result DTO returned by every check-in path."""

from datetime import datetime
from typing import Optional

import attrs

from src.service.admission.domain.check_in_domain import EntryDecision
from src.service.admission.domain.entity.event_entity import EventEntity
from src.service.admission.domain.entity.ticket_entity import TicketEntity
from src.service.admission.domain.entity.user_entity import UserEntity
from src.service.admission.domain.enum.scan_status import ScanStatus


MESSAGE_VALID = 'Ticket verified successfully.'
MESSAGE_DUPLICATE = 'Ticket was already checked in.'
MESSAGE_UNKNOWN_QR = 'No ticket matches the scanned code.'
MESSAGE_BLANK_QR = 'QR code must not be empty.'
MESSAGE_INVALID_NUMBER = 'Ticket number is invalid.'
MESSAGE_NUMBER_NOT_FOUND = 'Ticket number not found.'
MESSAGE_NO_EVENT = 'Ticket is not linked to an event.'
MESSAGE_WRONG_EVENT = 'Ticket belongs to a different event.'


@attrs.define(frozen=True)
class ScanResult:
    """
    Outcome of one scan.

    `invalid` results carry no ticket or event fields; the gate shows the
    message and keeps scanning. `already_checked_in` is the state observed
    before this scan, so a first entry is always False.
    """

    status: ScanStatus
    message: str
    gate: str
    scanned_at: datetime
    ticket_id: Optional[int] = None
    event_id: Optional[int] = None
    ticket_number: Optional[str] = None
    attendee_name: Optional[str] = None
    attendee_email: Optional[str] = None
    event_title: Optional[str] = None
    event_start: Optional[datetime] = None
    event_end: Optional[datetime] = None
    re_entry_count: int = 0
    already_checked_in: bool = False
    previous_scan_at: Optional[datetime] = None

    @classmethod
    def invalid(cls, *, message: str, gate: str, scanned_at: datetime) -> 'ScanResult':
        return cls(status=ScanStatus.INVALID, message=message, gate=gate, scanned_at=scanned_at)

    @classmethod
    def from_decision(
        cls,
        *,
        decision: EntryDecision,
        ticket: TicketEntity,
        attendee: Optional[UserEntity],
        event: Optional[EventEntity],
        gate: str,
        scanned_at: datetime,
    ) -> 'ScanResult':
        # A missing event on the QR path still admits; event fields are left empty
        return cls(
            status=decision.status,
            message=MESSAGE_VALID if decision.status == ScanStatus.VALID else MESSAGE_DUPLICATE,
            gate=gate,
            scanned_at=scanned_at,
            ticket_id=ticket.id,
            event_id=ticket.event_id,
            ticket_number=ticket.ticket_number,
            attendee_name=attendee.name if attendee else None,
            attendee_email=attendee.email if attendee else None,
            event_title=event.name if event else None,
            event_start=event.start_date if event else None,
            event_end=event.end_date if event else None,
            re_entry_count=decision.re_entry_count,
            already_checked_in=decision.already_checked_in,
            previous_scan_at=decision.previous_scan_at,
        )
