# -*- coding: utf-8 -*-
"""Task repositories. Public API: use todoapp.store.open_store and todoapp.store.TaskStore."""

from todoapp.repos.null_repo import NullTasksRepo
from todoapp.repos.tasks_repo import TasksRepo

__all__ = [
    "NullTasksRepo",
    "TasksRepo",
]
