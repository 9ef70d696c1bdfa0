"""
Check-in decision

Given a ticket read under its per-ticket lock and its latest attendance log,
decide whether this scan is the first valid entry or a re-entry:

    ACTIVE      -> valid,     re_entry_count 0, ticket becomes CHECKED_IN
    CHECKED_IN  -> duplicate, re_entry_count latest + 1 (1 without history)
    USED        -> same as CHECKED_IN

Both outcomes append one attendance log row. The ticket never goes back to
ACTIVE.
"""

from datetime import datetime
from typing import Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.admission.domain.entity.attendance_log_entity import AttendanceLogEntity
from src.service.admission.domain.entity.ticket_entity import TicketEntity
from src.service.admission.domain.enum.scan_status import AttendanceStatus, ScanStatus


@attrs.define(frozen=True)
class EntryDecision:
    status: ScanStatus
    already_checked_in: bool
    re_entry_count: int
    attendance_log: AttendanceLogEntity
    checked_in_ticket: Optional[TicketEntity]  # None for duplicates, the status stays as is
    previous_scan_at: Optional[datetime]


@Logger.io
def decide_entry(
    *,
    ticket: TicketEntity,
    latest_log: Optional[AttendanceLogEntity],
    gate: str,
    scanned_at: datetime,
) -> EntryDecision:
    ticket_id = ticket.persisted_id
    already_checked_in = ticket.is_checked_in
    previous_scan_at = latest_log.start_time if latest_log else None

    if already_checked_in:
        re_entry_count = (latest_log.re_entry_count + 1) if latest_log else 1
        return EntryDecision(
            status=ScanStatus.DUPLICATE,
            already_checked_in=True,
            re_entry_count=re_entry_count,
            attendance_log=AttendanceLogEntity(
                ticket_id=ticket_id,
                event_id=ticket.event_id,
                user_id=ticket.user_id,
                start_time=scanned_at,
                gate=gate,
                status=AttendanceStatus.DUPLICATE,
                re_entry_count=re_entry_count,
            ),
            checked_in_ticket=None,
            previous_scan_at=previous_scan_at,
        )

    return EntryDecision(
        status=ScanStatus.VALID,
        already_checked_in=False,
        re_entry_count=0,
        attendance_log=AttendanceLogEntity(
            ticket_id=ticket_id,
            event_id=ticket.event_id,
            user_id=ticket.user_id,
            start_time=scanned_at,
            gate=gate,
            status=AttendanceStatus.VALID,
            re_entry_count=0,
        ),
        checked_in_ticket=ticket.check_in(),
        previous_scan_at=previous_scan_at,
    )
