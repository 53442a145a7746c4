"""
Live task list: keeps the latest query result for one partition.

Reads are never cancelled. Each refresh takes a ticket; a result is only
stored if no later-issued refresh has already been stored, so a slow,
superseded query can never overwrite a newer result.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from todoapp.models import Task, TaskFilter
from todoapp.store import TaskStore

logger = logging.getLogger(__name__)


class LiveTaskList:
    def __init__(self, store: TaskStore, filters: TaskFilter = TaskFilter()) -> None:
        self._store = store
        self._filters = filters
        self._issued = 0
        self._applied = 0
        self._items: Optional[list[Task]] = None
        self._version = -1
        self._unsubscribe = None
        self._pending: set[asyncio.Task] = set()

    @property
    def filters(self) -> TaskFilter:
        return self._filters

    @property
    def items(self) -> Optional[list[Task]]:
        """Last applied result, or None before the first refresh completes."""
        return self._items

    @property
    def version(self) -> int:
        """Signal version the current items were read at."""
        return self._version

    @property
    def stale(self) -> bool:
        return self._version != self._store.signal.version

    async def refresh(self) -> list[Task]:
        self._issued += 1
        ticket = self._issued
        version = self._store.signal.version
        filters = self._filters

        items = await self._store.query(filters)

        if ticket < self._applied:
            logger.debug("Dropping superseded result ticket=%s applied=%s", ticket, self._applied)
            return self._items or []
        self._applied = ticket
        self._items = items
        self._version = version
        return items

    async def set_filters(self, filters: TaskFilter) -> list[Task]:
        self._filters = filters
        return await self.refresh()

    def attach(self) -> None:
        """Re-query whenever the store's invalidation signal is bumped."""
        if self._unsubscribe is None:
            self._unsubscribe = self._store.signal.subscribe(self._on_invalidate)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def wait_idle(self) -> None:
        """Wait for refreshes scheduled by the signal to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _on_invalidate(self, version: int) -> None:
        task = asyncio.get_running_loop().create_task(self.refresh())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        task.add_done_callback(self._log_failure)

    def _log_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.exception("Background refresh failed filters=%s", self._filters, exc_info=exc)
