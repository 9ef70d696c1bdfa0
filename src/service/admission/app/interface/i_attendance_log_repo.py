"""
Attendance Log Repository Interface

Append-only: there is no update or delete. The latest log of a ticket is the
one written last (greatest id). Event listings order by start_time, then id.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.admission.domain.entity.attendance_log_entity import AttendanceLogEntity
from src.service.admission.domain.enum.scan_status import AttendanceStatus


class IAttendanceLogRepo(ABC):
    @abstractmethod
    async def create(self, *, attendance_log: AttendanceLogEntity) -> AttendanceLogEntity:
        pass

    @abstractmethod
    async def get_latest_by_ticket_id(self, *, ticket_id: int) -> Optional[AttendanceLogEntity]:
        pass

    @abstractmethod
    async def count_by_event_id(self, *, event_id: int) -> int:
        pass

    @abstractmethod
    async def count_by_event_id_and_status(
        self, *, event_id: int, status: AttendanceStatus
    ) -> int:
        pass

    @abstractmethod
    async def list_recent_by_event_id(
        self, *, event_id: int, limit: int = 25
    ) -> List[AttendanceLogEntity]:
        pass
