from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.dto.event_attendance_summary import EventAttendanceSummary
from src.service.admission.domain.enum.scan_status import AttendanceStatus


RECENT_SCAN_LIMIT = 25


class GetEventAttendanceUseCase:
    """Gate dashboard numbers for one event: scan totals plus the latest scans"""

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.unit_of_work.provider]),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def get_attendance(self, *, event_id: int) -> EventAttendanceSummary:
        async with self.uow_factory() as uow:
            event = await uow.event_repo.get_by_id(event_id=event_id)
            if not event:
                raise NotFoundError('Event not found')

            repo = uow.attendance_log_repo
            return EventAttendanceSummary(
                event_id=event.id,
                event_name=event.name,
                capacity=event.capacity,
                tickets_sold=event.tickets_sold,
                total_scans=await repo.count_by_event_id(event_id=event_id),
                valid_entries=await repo.count_by_event_id_and_status(
                    event_id=event_id, status=AttendanceStatus.VALID
                ),
                duplicate_scans=await repo.count_by_event_id_and_status(
                    event_id=event_id, status=AttendanceStatus.DUPLICATE
                ),
                recent_scans=await repo.list_recent_by_event_id(
                    event_id=event_id, limit=RECENT_SCAN_LIMIT
                ),
            )
