"""Per-user mutual exclusion for rule-set mutations.

Priority renumbering reads and then rewrites a user's whole rule list, so two
concurrent mutations for the same user would lose one of the writes. Each
mutating call runs inside ``registry.hold(user_id)``; different users never
contend.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class UserLockRegistry:
    """Hands out one ``asyncio.Lock`` per user id.

    Locks are process-local. Deployments running several workers against the
    same database need the store itself to serialize writes.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._waiters[user_id] = self._waiters.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[user_id] -= 1
            if self._waiters[user_id] == 0:
                # Nobody holds or waits on it any more
                del self._waiters[user_id]
                del self._locks[user_id]

    @property
    def active_users(self) -> int:
        """Users with a lock currently held or awaited."""
        return len(self._locks)
