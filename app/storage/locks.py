from __future__ import annotations

import asyncio
import threading
from contextlib import asynccontextmanager


class PurposeLocks:
    """Per-purpose mutual exclusion for the delete-then-write sequence.

    Only serializes requests within one process. A purpose's lock is dropped
    once no request holds or waits on it.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._locks)

    @asynccontextmanager
    async def hold(self, purpose: str):
        with self._lock:
            lock = self._locks.setdefault(purpose, asyncio.Lock())
            self._users[purpose] = self._users.get(purpose, 0) + 1
        try:
            async with lock:
                yield
        finally:
            with self._lock:
                self._users[purpose] -= 1
                if self._users[purpose] == 0:
                    del self._users[purpose]
                    del self._locks[purpose]
