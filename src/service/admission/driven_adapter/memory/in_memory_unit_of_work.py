from __future__ import annotations

from contextlib import AsyncExitStack
from typing import Any, Dict, Iterable, Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.admission.driven_adapter.memory.in_memory_database import InMemoryDatabase


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    Unit of Work over InMemoryDatabase

    - `lock(key)` holds a per-entity lock until the UoW exits (re-entrant
      within one UoW)
    - `stage(table, row)` buffers a write; reads through `get`/`rows` see the
      buffered rows, other units of work only see them after `commit()`
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self._exit_stack: Optional[AsyncExitStack] = None
        self._held_keys: set[str] = set()
        self._staged: Dict[str, Dict[int, Any]] = {}

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.admission.driven_adapter.memory.in_memory_repo_impl import (
            InMemoryAttendanceLogRepo,
            InMemoryEventRepo,
            InMemoryPaymentRecorder,
            InMemoryTicketRepo,
            InMemoryUserQueryRepo,
        )

        self._exit_stack = AsyncExitStack()
        self._held_keys = set()
        self._staged = {}

        self.user_query_repo = InMemoryUserQueryRepo(uow=self)
        self.event_repo = InMemoryEventRepo(uow=self)
        self.ticket_repo = InMemoryTicketRepo(uow=self)
        self.attendance_log_repo = InMemoryAttendanceLogRepo(uow=self)
        self.payment_recorder = InMemoryPaymentRecorder(uow=self)

        return await super().__aenter__()

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._exit_stack is not None:
                await self._exit_stack.aclose()
                self._exit_stack = None
            self._held_keys = set()

    async def lock(self, key: str) -> None:
        assert self._exit_stack is not None, 'lock() called outside `async with uow`'
        if key in self._held_keys:
            return
        await self._exit_stack.enter_async_context(self.database.locks.hold(key))
        self._held_keys.add(key)

    def stage(self, table: str, row_id: int, row: Any) -> None:
        self._staged.setdefault(table, {})[row_id] = row

    def get(self, table: str, row_id: int) -> Optional[Any]:
        staged = self._staged.get(table, {})
        if row_id in staged:
            return staged[row_id]
        return self.database.tables[table].get(row_id)

    def rows(self, table: str) -> Iterable[Any]:
        return {**self.database.tables[table], **self._staged.get(table, {})}.values()

    async def _commit(self) -> None:
        for table, rows in self._staged.items():
            self.database.tables[table].update(rows)
        self._staged = {}

    async def rollback(self) -> None:
        if self._staged:
            Logger.base.debug(
                f'↩️ [UOW] Discarding {sum(len(rows) for rows in self._staged.values())} staged rows'
            )
        self._staged = {}
