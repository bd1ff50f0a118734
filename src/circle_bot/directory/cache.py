"""
In-process circle directory.

:class:`DirectoryCache` maps circle id -> :class:`Circle` and is guarded by a
writer-preferring reader/writer lock:

- any number of readers (``get``, ``list``, ``count``) may hold it together
- a writer (``upsert``, ``remove``, ``merge_snapshot``) holds it alone
- once a writer is waiting, new readers queue behind it

Records are frozen dataclasses, so readers can hand them out without copying
and can never observe a half-written entry. Only
:class:`~circle_bot.directory.service.DirectoryService` should mutate the cache.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from .models import Circle

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """asyncio reader/writer lock that favours waiting writers."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and not self._writers_waiting
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and not self._readers)
            finally:
                self._writers_waiting -= 1
                # A cancelled waiter may have been the only thing holding readers back.
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


class DirectoryCache:
    """Shared id -> circle mapping with reader/writer exclusion."""

    def __init__(self) -> None:
        self._circles: dict[str, Circle] = {}
        self._lock = ReadWriteLock()

    # ------------------------------------------------------------------ #
    # READ helpers
    # ------------------------------------------------------------------ #

    async def get(self, circle_id: str) -> Circle | None:
        async with self._lock.read():
            return self._circles.get(circle_id)

    async def list(self) -> list[Circle]:
        """Return a point-in-time copy of every cached circle."""

        async with self._lock.read():
            return list(self._circles.values())

    async def count(self) -> int:
        async with self._lock.read():
            return len(self._circles)

    # ------------------------------------------------------------------ #
    # WRITE helpers
    # ------------------------------------------------------------------ #

    async def upsert(self, circle: Circle) -> None:
        async with self._lock.write():
            self._circles[circle.id] = circle

    async def remove(self, circle_id: str) -> None:
        async with self._lock.write():
            self._circles.pop(circle_id, None)

    async def merge_snapshot(self, records: Iterable[Circle]) -> int:
        """
        Insert or overwrite every record in ``records`` by id.

        Ids missing from ``records`` are left in place: a circle deleted
        upstream stays cached until an explicit :meth:`remove`.

        :returns: Number of records merged.
        """
        # Materialize before locking so a lazy iterable cannot run under the writer lock.
        snapshot = list(records)
        async with self._lock.write():
            for circle in snapshot:
                self._circles[circle.id] = circle
            size = len(self._circles)
        logger.debug("Merged %d circle(s); directory now holds %d", len(snapshot), size)
        return len(snapshot)
