from typing import List

import attrs

from src.service.admission.domain.entity.attendance_log_entity import AttendanceLogEntity


@attrs.define(frozen=True)
class EventAttendanceSummary:
    event_id: int
    event_name: str
    capacity: int
    tickets_sold: int
    total_scans: int
    valid_entries: int
    duplicate_scans: int
    recent_scans: List[AttendanceLogEntity] = attrs.field(factory=list)
