# -*- coding: utf-8 -*-
"""
Task store: the object the UI layer holds.

Built once by open_store() and passed to whoever needs it. Owns the
repository, the invalidation signal and the clock used for date filters.
"""
from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Union

import aiosqlite

from todoapp.constants import DEFAULT_PRIORITY, STORAGE_NONE, STORAGE_SQLITE, UNSUPPORTED_PLATFORMS
from todoapp.errors import StoreOpenError
from todoapp.infra.clock.system_clock import SystemClock
from todoapp.infra.db.connection import Database
from todoapp.infra.db.schema import ensure_schema
from todoapp.models import Task, TaskFilter
from todoapp.ports import Clock, TaskRepository
from todoapp.query import build_query_plan
from todoapp.repos import NullTasksRepo, TasksRepo
from todoapp.signal import InvalidationSignal

logger = logging.getLogger(__name__)


class TaskStore:
    def __init__(self, repo: TaskRepository, signal: InvalidationSignal, clock: Clock) -> None:
        self._repo = repo
        self._signal = signal
        self._clock = clock

    @property
    def repo(self) -> TaskRepository:
        return self._repo

    @property
    def signal(self) -> InvalidationSignal:
        return self._signal

    @property
    def degraded(self) -> bool:
        return isinstance(self._repo, NullTasksRepo)

    async def add_task(
        self,
        value: str,
        category: Optional[str] = None,
        priority: str = DEFAULT_PRIORITY,
        due_date: Union[str, date, None] = None,
        notes: Optional[str] = None,
    ) -> int:
        return await self._repo.add_task(value, category, priority, due_date, notes)

    async def edit_task(
        self,
        task_id: int,
        value: str,
        category: Optional[str],
        priority: str,
        due_date: Union[str, date, None],
        notes: Optional[str],
    ) -> bool:
        return await self._repo.edit_task(task_id, value, category, priority, due_date, notes)

    async def toggle_done(self, task_id: int) -> bool:
        return await self._repo.toggle_done(task_id)

    async def toggle_todo(self, task_id: int) -> bool:
        return await self._repo.toggle_todo(task_id)

    async def toggle_completed(self, task_id: int) -> bool:
        return await self._repo.toggle_completed(task_id)

    async def delete_task(self, task_id: int) -> bool:
        return await self._repo.delete_task(task_id)

    async def get_task(self, task_id: int) -> Optional[Task]:
        return await self._repo.get_task(task_id)

    async def query(self, filters: TaskFilter) -> list[Task]:
        # Date filters use the date at call time.
        plan = build_query_plan(filters, self._clock.today())
        return await self._repo.query(plan)

    async def partitions(self, filters: TaskFilter) -> tuple[list[Task], list[Task]]:
        """(todo, completed) for the same filters; two separate queries."""
        todo = await self.query(filters.for_partition(False))
        done = await self.query(filters.for_partition(True))
        return todo, done


def storage_supported(platform: Optional[str] = None) -> bool:
    return (platform or sys.platform) not in UNSUPPORTED_PLATFORMS


async def open_store(
    db_path: Union[str, Path],
    *,
    tz_name: str = "UTC",
    backend: str = STORAGE_SQLITE,
    platform: Optional[str] = None,
    clock: Optional[Clock] = None,
) -> TaskStore:
    """
    Open the store and bring its schema up to date before returning.

    Falls back to a NullTasksRepo when the backend is 'none' or the platform
    has no file-backed sqlite. Raises StoreOpenError if the database cannot
    be opened or migrated.
    """
    clock = clock or SystemClock(tz_name)
    signal = InvalidationSignal()

    if backend == STORAGE_NONE or not storage_supported(platform):
        logger.warning(
            "Task storage unavailable (backend=%s platform=%s); nothing will be saved",
            backend, platform or sys.platform,
        )
        return TaskStore(NullTasksRepo(), signal, clock)
    if backend != STORAGE_SQLITE:
        raise StoreOpenError(f"Unknown storage backend: {backend!r}")

    path = Path(db_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        db = Database(str(path))
        await db.enable_wal()
        async with db.transaction() as conn:
            added = await ensure_schema(conn)
        repo = TasksRepo(db, signal)
        total = await repo.count_tasks()
    except (aiosqlite.Error, OSError) as e:
        raise StoreOpenError(f"Cannot open task store at {path}: {e}") from e

    logger.info("TaskStore ready db=%s total=%s migrated=%s", path, total, added or "-")
    return TaskStore(repo, signal, clock)
