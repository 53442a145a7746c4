# -*- coding: utf-8 -*-
"""Degraded repository for hosts without a usable sqlite: persists nothing."""
from __future__ import annotations

from datetime import date
from typing import Optional, Union

from todoapp.constants import DEFAULT_PRIORITY
from todoapp.models import QueryPlan, Task
from todoapp.ports import TaskRepository
from todoapp.utils import validate_task_fields


class NullTasksRepo(TaskRepository):
    """
    Every write succeeds without storing anything and every read is empty.

    Field validation still applies so callers see the same errors on every
    platform. Writes do not bump the invalidation signal since nothing changed.
    """

    async def add_task(
        self,
        value: str,
        category: Optional[str] = None,
        priority: str = DEFAULT_PRIORITY,
        due_date: Union[str, date, None] = None,
        notes: Optional[str] = None,
    ) -> int:
        validate_task_fields(value, category, priority, due_date, notes)
        return 0

    async def edit_task(
        self,
        task_id: int,
        value: str,
        category: Optional[str],
        priority: str,
        due_date: Union[str, date, None],
        notes: Optional[str],
    ) -> bool:
        validate_task_fields(value, category, priority, due_date, notes)
        return False

    async def toggle_done(self, task_id: int) -> bool:
        return False

    async def delete_task(self, task_id: int) -> bool:
        return False

    async def get_task(self, task_id: int) -> Optional[Task]:
        return None

    async def count_tasks(self) -> int:
        return 0

    async def query(self, plan: QueryPlan) -> list[Task]:
        return []
