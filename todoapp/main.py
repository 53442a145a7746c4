from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from todoapp.config import load_settings
from todoapp.constants import (
    CATEGORIES,
    CATEGORY_ALL,
    DEFAULT_PRIORITY,
    DUE_ALL,
    DUE_FILTERS,
    PRIORITIES,
    PRIORITY_ALL,
    SORT_ASC,
    SORT_DATE,
    SORT_ORDERS,
    SORT_PRIORITY,
    SORTABLE_COLUMNS,
)
from todoapp.errors import StoreOpenError, TaskValidationError
from todoapp.models import Task, TaskFilter
from todoapp.store import TaskStore, open_store

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todoapp", description="Local task list")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_fields(p: argparse.ArgumentParser) -> None:
        p.add_argument("value")
        p.add_argument("--category", choices=CATEGORIES)
        p.add_argument("--priority", choices=PRIORITIES, default=DEFAULT_PRIORITY)
        p.add_argument("--due", dest="due_date", help="YYYY-MM-DD")
        p.add_argument("--notes")

    add_fields(sub.add_parser("add", help="add a task"))

    p_edit = sub.add_parser("edit", help="replace all fields of a task")
    p_edit.add_argument("id", type=int)
    add_fields(p_edit)

    p_toggle = sub.add_parser("toggle", help="mark a task done / not done")
    p_toggle.add_argument("id", type=int)

    p_delete = sub.add_parser("delete", help="delete a task")
    p_delete.add_argument("id", type=int)

    p_list = sub.add_parser("list", help="show todo and completed tasks")
    p_list.add_argument("--category", choices=(CATEGORY_ALL,) + CATEGORIES, default=CATEGORY_ALL)
    p_list.add_argument("--search", default="")
    p_list.add_argument("--priority", choices=(PRIORITY_ALL,) + PRIORITIES, default=PRIORITY_ALL)
    p_list.add_argument("--due", choices=DUE_FILTERS, default=DUE_ALL)
    p_list.add_argument(
        "--sort", choices=(SORT_DATE, SORT_PRIORITY) + SORTABLE_COLUMNS, default=SORT_DATE
    )
    p_list.add_argument("--order", choices=SORT_ORDERS, default=SORT_ASC)
    return parser


def format_task(task: Task) -> str:
    parts = [f"[{'x' if task.done else ' '}] #{task.id} {task.value}", f"({task.priority})"]
    if task.category:
        parts.append(task.category)
    if task.due_date:
        parts.append(f"due {task.due_date}")
    line = " ".join(parts)
    if task.notes:
        line += f"\n      {task.notes}"
    return line


async def run_command(store: TaskStore, args: argparse.Namespace) -> int:
    if args.command == "add":
        task_id = await store.add_task(args.value, args.category, args.priority, args.due_date, args.notes)
        print(f"Added #{task_id}")
    elif args.command == "edit":
        if not await store.edit_task(args.id, args.value, args.category, args.priority, args.due_date, args.notes):
            print(f"No task #{args.id}")
    elif args.command == "toggle":
        if not await store.toggle_done(args.id):
            print(f"No task #{args.id}")
    elif args.command == "delete":
        await store.delete_task(args.id)
    elif args.command == "list":
        filters = TaskFilter(
            category=args.category,
            search_text=args.search,
            priority=args.priority,
            due=args.due,
            sort_by=args.sort,
            sort_order=args.order,
        )
        todo, done = await store.partitions(filters)
        for heading, tasks in (("Todo", todo), ("Completed", done)):
            if not tasks:
                continue
            print(heading)
            for task in tasks:
                print("  " + format_task(task))
    return 0


async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        store = await open_store(
            settings.db_path,
            tz_name=settings.timezone,
            backend=settings.storage_backend,
        )
    except StoreOpenError:
        logger.exception("Task store unusable")
        return 1

    try:
        return await run_command(store, args)
    except TaskValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
