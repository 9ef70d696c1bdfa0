"""Unit tests for KeyedLock"""

import asyncio

import pytest

from src.platform.state.keyed_lock import KeyedLock


@pytest.mark.unit
class TestKeyedLock:
    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self) -> None:
        # Arrange
        locks = KeyedLock()
        timeline: list[str] = []

        async def worker(name: str) -> None:
            async with locks.hold('event:1'):
                timeline.append(f'{name}:enter')
                await asyncio.sleep(0.01)
                timeline.append(f'{name}:exit')

        # Act
        await asyncio.gather(worker('a'), worker('b'))

        # Assert
        assert timeline == ['a:enter', 'a:exit', 'b:enter', 'b:exit']

    @pytest.mark.asyncio
    async def test_different_keys_do_not_block_each_other(self) -> None:
        locks = KeyedLock()

        async with locks.hold('ticket:1'):
            await asyncio.wait_for(self._enter_and_leave(locks, 'ticket:2'), timeout=1)
            assert locks.is_held('ticket:1')

    @pytest.mark.asyncio
    async def test_lock_is_dropped_once_released(self) -> None:
        locks = KeyedLock()

        async with locks.hold('event:1'):
            assert locks.is_held('event:1')

        assert not locks.is_held('event:1')
        assert locks._locks == {}
        assert locks._holders == {}

    @pytest.mark.asyncio
    async def test_lock_is_released_on_error(self) -> None:
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            async with locks.hold('event:1'):
                raise RuntimeError('boom')

        assert not locks.is_held('event:1')

    @staticmethod
    async def _enter_and_leave(locks: KeyedLock, key: str) -> None:
        async with locks.hold(key):
            pass
