# -*- coding: utf-8 -*-
"""Shared data models (Task, TaskFilter, QueryPlan)."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from todoapp.constants import (
    CATEGORY_ALL,
    DUE_ALL,
    PRIORITY_ALL,
    SORT_ASC,
    SORT_DATE,
)


@dataclass(frozen=True)
class Task:
    id: int
    done: bool
    value: str
    category: Optional[str]  # one of CATEGORIES or None
    priority: str  # 'high' | 'medium' | 'low'
    due_date: Optional[str]  # YYYY-MM-DD
    notes: Optional[str]


@dataclass(frozen=True)
class TaskFilter:
    """Filter/sort state collected by the UI. One query per `done` partition."""

    done: bool = False
    category: str = CATEGORY_ALL
    search_text: str = ""
    priority: str = PRIORITY_ALL
    due: str = DUE_ALL  # 'all' | 'today' | 'week'
    sort_by: str = SORT_DATE
    sort_order: str = SORT_ASC

    def for_partition(self, done: bool) -> "TaskFilter":
        return replace(self, done=done)


@dataclass(frozen=True)
class QueryPlan:
    sql: str
    params: tuple[Any, ...]
