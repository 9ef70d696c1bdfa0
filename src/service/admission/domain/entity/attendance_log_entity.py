from datetime import datetime
from typing import Optional

import attrs

from src.service.admission.domain.enum.scan_status import AttendanceStatus


@attrs.define
class AttendanceLogEntity:
    """One scan of one ticket at one gate. Append-only."""

    ticket_id: int
    event_id: int
    user_id: int
    start_time: datetime
    gate: str
    status: AttendanceStatus
    re_entry_count: int = 0
    id: Optional[int] = None
