"""
Unit of Work Pattern - one transaction per booking or per scan

Architecture:
- UoW owns the transaction (session lifecycle for PostgreSQL, staged writes
  and held keys for the in-memory backend)
- Repositories reached through the UoW share that transaction
- Row locks taken through `for_update=True` reads are held until the UoW exits
- Leaving the block without `commit()` rolls everything back
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.admission.app.interface.i_attendance_log_repo import IAttendanceLogRepo
    from src.service.admission.app.interface.i_event_repo import IEventRepo
    from src.service.admission.app.interface.i_payment_recorder import IPaymentRecorder
    from src.service.admission.app.interface.i_ticket_repo import ITicketRepo
    from src.service.admission.app.interface.i_user_query_repo import IUserQueryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the admission service

    Usage:
        async with uow:
            event = await uow.event_repo.get_by_id(event_id=1, for_update=True)
            ...
            await uow.commit()
    """

    user_query_repo: IUserQueryRepo
    event_repo: IEventRepo
    ticket_repo: ITicketRepo
    attendance_log_repo: IAttendanceLogRepo
    payment_recorder: IPaymentRecorder

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh session is opened on enter and closed on exit, so one instance
    maps to exactly one transaction. `SELECT ... FOR UPDATE` row locks taken by
    the repositories are released by the final commit or rollback.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.admission.driven_adapter.repo.attendance_log_repo_impl import (
            AttendanceLogRepoImpl,
        )
        from src.service.admission.driven_adapter.repo.event_repo_impl import EventRepoImpl
        from src.service.admission.driven_adapter.repo.payment_recorder_impl import (
            PaymentRecorderImpl,
        )
        from src.service.admission.driven_adapter.repo.ticket_repo_impl import TicketRepoImpl
        from src.service.admission.driven_adapter.repo.user_query_repo_impl import (
            UserQueryRepoImpl,
        )

        self.session = self.session_factory()

        # Repositories share the UoW session
        self.user_query_repo = UserQueryRepoImpl(session=self.session)
        self.event_repo = EventRepoImpl(session=self.session)
        self.ticket_repo = TicketRepoImpl(session=self.session)
        self.attendance_log_repo = AttendanceLogRepoImpl(session=self.session)
        self.payment_recorder = PaymentRecorderImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() called outside `async with uow`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None and self.session.in_transaction():
            Logger.base.debug('↩️ [UOW] Rolling back open transaction')
            await self.session.rollback()
