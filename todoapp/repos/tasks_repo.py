# -*- coding: utf-8 -*-
"""items table: CRUD, one statement per transaction."""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Union

import aiosqlite

from todoapp.constants import DEFAULT_PRIORITY
from todoapp.infra.db.connection import Database
from todoapp.models import QueryPlan, Task
from todoapp.ports import TaskRepository
from todoapp.signal import InvalidationSignal
from todoapp.utils import validate_task_fields

logger = logging.getLogger(__name__)


def row_to_task(row: aiosqlite.Row) -> Task:
    return Task(
        id=int(row["id"]),
        done=bool(row["done"]),
        value=row["value"],
        category=row["category"],
        priority=row["priority"] or DEFAULT_PRIORITY,
        due_date=row["due_date"],
        notes=row["notes"],
    )


class TasksRepo(TaskRepository):
    """Writes bump the invalidation signal once the statement has committed."""

    def __init__(self, db: Database, signal: InvalidationSignal) -> None:
        self._db = db
        self._signal = signal

    async def add_task(
        self,
        value: str,
        category: Optional[str] = None,
        priority: str = DEFAULT_PRIORITY,
        due_date: Union[str, date, None] = None,
        notes: Optional[str] = None,
    ) -> int:
        value, category, priority, due_date, notes = validate_task_fields(
            value, category, priority, due_date, notes
        )
        cur = await self._db.execute(
            """
            INSERT INTO items (done, value, category, priority, due_date, notes)
            VALUES (0, ?, ?, ?, ?, ?);
            """,
            (value, category, priority, due_date, notes),
        )
        task_id = int(cur.lastrowid)
        logger.debug("Task added id=%s priority=%s due=%s", task_id, priority, due_date)
        self._signal.bump()
        return task_id

    async def edit_task(
        self,
        task_id: int,
        value: str,
        category: Optional[str],
        priority: str,
        due_date: Union[str, date, None],
        notes: Optional[str],
    ) -> bool:
        value, category, priority, due_date, notes = validate_task_fields(
            value, category, priority, due_date, notes
        )
        cur = await self._db.execute(
            """
            UPDATE items
            SET value = ?, category = ?, priority = ?, due_date = ?, notes = ?
            WHERE id = ?;
            """,
            (value, category, priority, due_date, notes, task_id),
        )
        updated = cur.rowcount > 0
        logger.debug("Task edited id=%s found=%s", task_id, updated)
        self._signal.bump()
        return updated

    async def toggle_done(self, task_id: int) -> bool:
        cur = await self._db.execute(
            "UPDATE items SET done = CASE done WHEN 1 THEN 0 ELSE 1 END WHERE id = ?;",
            (task_id,),
        )
        toggled = cur.rowcount > 0
        logger.debug("Task toggled id=%s found=%s", task_id, toggled)
        self._signal.bump()
        return toggled

    async def delete_task(self, task_id: int) -> bool:
        cur = await self._db.execute("DELETE FROM items WHERE id = ?;", (task_id,))
        deleted = cur.rowcount > 0
        logger.debug("Task deleted id=%s found=%s", task_id, deleted)
        self._signal.bump()
        return deleted

    async def get_task(self, task_id: int) -> Optional[Task]:
        row = await self._db.fetchone(
            """
            SELECT id, done, value, category, priority, due_date, notes
            FROM items
            WHERE id = ?;
            """,
            (task_id,),
        )
        return row_to_task(row) if row else None

    async def count_tasks(self) -> int:
        row = await self._db.fetchone("SELECT COUNT(*) AS count FROM items;")
        return int(row["count"]) if row else 0

    async def query(self, plan: QueryPlan) -> list[Task]:
        rows = await self._db.fetchall(plan.sql, plan.params)
        return [row_to_task(r) for r in rows]
