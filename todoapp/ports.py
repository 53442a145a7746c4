from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from todoapp.models import QueryPlan, Task


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...

    def today(self) -> date:
        return self.now().date()


class TaskRepository(ABC):
    @abstractmethod
    async def add_task(
        self,
        value: str,
        category: Optional[str] = None,
        priority: str = "medium",
        due_date: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int: ...

    @abstractmethod
    async def edit_task(
        self,
        task_id: int,
        value: str,
        category: Optional[str],
        priority: str,
        due_date: Optional[str],
        notes: Optional[str],
    ) -> bool: ...

    @abstractmethod
    async def toggle_done(self, task_id: int) -> bool: ...

    @abstractmethod
    async def delete_task(self, task_id: int) -> bool: ...

    @abstractmethod
    async def get_task(self, task_id: int) -> Optional[Task]: ...

    @abstractmethod
    async def count_tasks(self) -> int: ...

    @abstractmethod
    async def query(self, plan: QueryPlan) -> list[Task]: ...

    async def toggle_todo(self, task_id: int) -> bool:
        """Toggle entry point used by the todo list."""
        return await self.toggle_done(task_id)

    async def toggle_completed(self, task_id: int) -> bool:
        """Toggle entry point used by the completed list."""
        return await self.toggle_done(task_id)
