from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_attendance_log_repo import IAttendanceLogRepo
from src.service.admission.domain.entity.attendance_log_entity import AttendanceLogEntity
from src.service.admission.domain.enum.scan_status import AttendanceStatus
from src.service.admission.driven_adapter.model.attendance_log_model import AttendanceLogModel


_NEWEST_FIRST = (AttendanceLogModel.start_time.desc(), AttendanceLogModel.id.desc())


class AttendanceLogRepoImpl(IAttendanceLogRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_log: AttendanceLogModel) -> AttendanceLogEntity:
        return AttendanceLogEntity(
            id=db_log.id,
            ticket_id=db_log.ticket_id,
            event_id=db_log.event_id,
            user_id=db_log.user_id,
            start_time=db_log.start_time,
            gate=db_log.gate,
            status=AttendanceStatus(db_log.status),
            re_entry_count=db_log.re_entry_count,
        )

    @Logger.io
    async def create(self, *, attendance_log: AttendanceLogEntity) -> AttendanceLogEntity:
        db_log = AttendanceLogModel(
            ticket_id=attendance_log.ticket_id,
            event_id=attendance_log.event_id,
            user_id=attendance_log.user_id,
            start_time=attendance_log.start_time,
            gate=attendance_log.gate,
            status=attendance_log.status.value,
            re_entry_count=attendance_log.re_entry_count,
        )
        self.session.add(db_log)
        await self.session.flush()
        return self._to_entity(db_log)

    @Logger.io
    async def get_latest_by_ticket_id(self, *, ticket_id: int) -> Optional[AttendanceLogEntity]:
        result = await self.session.execute(
            select(AttendanceLogModel)
            .where(AttendanceLogModel.ticket_id == ticket_id)
            .order_by(AttendanceLogModel.id.desc())
            .limit(1)
        )
        db_log = result.scalar_one_or_none()
        return self._to_entity(db_log) if db_log else None

    @Logger.io
    async def count_by_event_id(self, *, event_id: int) -> int:
        result = await self.session.execute(
            select(func.count(AttendanceLogModel.id)).where(AttendanceLogModel.event_id == event_id)
        )
        return result.scalar_one()

    @Logger.io
    async def count_by_event_id_and_status(
        self, *, event_id: int, status: AttendanceStatus
    ) -> int:
        result = await self.session.execute(
            select(func.count(AttendanceLogModel.id)).where(
                AttendanceLogModel.event_id == event_id,
                AttendanceLogModel.status == status.value,
            )
        )
        return result.scalar_one()

    @Logger.io
    async def list_recent_by_event_id(
        self, *, event_id: int, limit: int = 25
    ) -> List[AttendanceLogEntity]:
        result = await self.session.execute(
            select(AttendanceLogModel)
            .where(AttendanceLogModel.event_id == event_id)
            .order_by(*_NEWEST_FIRST)
            .limit(limit)
        )
        return [self._to_entity(db_log) for db_log in result.scalars().all()]
