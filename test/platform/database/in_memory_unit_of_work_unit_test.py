"""
Unit tests for InMemoryUnitOfWork

Staged writes, commit/rollback visibility and lock lifetime.
"""

from decimal import Decimal

import attrs
import pytest

from src.service.admission.domain.entity.event_entity import EventEntity
from src.service.admission.driven_adapter.memory.in_memory_database import InMemoryDatabase
from src.service.admission.driven_adapter.memory.in_memory_repo_impl import event_lock_key
from src.service.admission.driven_adapter.memory.in_memory_unit_of_work import (
    InMemoryUnitOfWork,
)


@pytest.fixture
def database() -> InMemoryDatabase:
    db = InMemoryDatabase()
    db.add_event(EventEntity(id=1, name='Gala', capacity=5, ticket_price=Decimal('10')))
    return db


@pytest.mark.unit
class TestInMemoryUnitOfWork:
    @pytest.mark.asyncio
    async def test_commit_publishes_staged_rows(self, database: InMemoryDatabase) -> None:
        async with InMemoryUnitOfWork(database=database) as uow:
            event = await uow.event_repo.get_by_id(event_id=1)
            await uow.event_repo.update_tickets_sold(event=attrs.evolve(event, tickets_sold=2))

            # Own writes are visible, the shared table is untouched until commit
            assert (await uow.event_repo.get_by_id(event_id=1)).tickets_sold == 2
            assert database.tables['event'][1].tickets_sold == 0

            await uow.commit()

        assert database.tables['event'][1].tickets_sold == 2

    @pytest.mark.asyncio
    async def test_exit_without_commit_discards_writes(self, database: InMemoryDatabase) -> None:
        async with InMemoryUnitOfWork(database=database) as uow:
            event = await uow.event_repo.get_by_id(event_id=1)
            await uow.event_repo.update_tickets_sold(event=attrs.evolve(event, tickets_sold=4))

        assert database.tables['event'][1].tickets_sold == 0

    @pytest.mark.asyncio
    async def test_error_inside_block_rolls_back(self, database: InMemoryDatabase) -> None:
        with pytest.raises(ValueError):
            async with InMemoryUnitOfWork(database=database) as uow:
                event = await uow.event_repo.get_by_id(event_id=1, for_update=True)
                await uow.event_repo.update_tickets_sold(event=attrs.evolve(event, tickets_sold=1))
                raise ValueError('abort')

        assert database.tables['event'][1].tickets_sold == 0
        assert not database.locks.is_held(event_lock_key(1))

    @pytest.mark.asyncio
    async def test_for_update_holds_lock_until_exit(self, database: InMemoryDatabase) -> None:
        async with InMemoryUnitOfWork(database=database) as uow:
            await uow.event_repo.get_by_id(event_id=1, for_update=True)
            # Re-locking within the same unit of work does not deadlock
            await uow.event_repo.get_by_id(event_id=1, for_update=True)
            assert database.locks.is_held(event_lock_key(1))
            await uow.commit()
            assert database.locks.is_held(event_lock_key(1))

        assert not database.locks.is_held(event_lock_key(1))

    @pytest.mark.asyncio
    async def test_ids_are_not_reused_after_rollback(self, database: InMemoryDatabase) -> None:
        async with InMemoryUnitOfWork(database=database):
            first_id = database.next_id('ticket')

        assert database.next_id('ticket') == first_id + 1
