"""
Per-key asyncio lock registry

In-process counterpart of a row lock: callers holding the same key are
serialized, callers on different keys never wait on each other. Locks are
created on first use and dropped once nobody holds or waits on them.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.platform.logging.loguru_io import Logger


class KeyedLock:
    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """
        Hold the lock for `key` for the duration of the block

        Args:
            key: Lock key (e.g., "event:12", "ticket:345")
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            if lock.locked():
                Logger.base.debug(f'⏳ [LOCK] Waiting for {key}')
            async with lock:
                Logger.base.debug(f'🔒 [LOCK] Acquired {key}')
                yield
        finally:
            self._holders[key] -= 1
            if not self._holders[key]:
                del self._holders[key]
                del self._locks[key]
            Logger.base.debug(f'🔓 [LOCK] Released {key}')

    def is_held(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()
