"""
Query composer: turns a TaskFilter into a parameterized SELECT over items.

Rules:
- every query is restricted to one `done` partition
- optional predicates are ANDed in only when their filter is not the
  "no filter" sentinel, so they are independent and commutative
- all values are bound as parameters; column names in ORDER BY come from
  a fixed whitelist
- date filters are evaluated against the `today` passed in, never cached
- NULL due dates sort last for both directions
- ties fall back to id ASC (insertion order)
"""
from __future__ import annotations

from datetime import date, timedelta

from todoapp.constants import (
    CATEGORY_ALL,
    DEFAULT_PRIORITY,
    DUE_FILTERS,
    DUE_TODAY,
    DUE_WEEK,
    PRIORITY_ALL,
    PRIORITY_RANK,
    SORT_DATE,
    SORT_DESC,
    SORT_ORDERS,
    SORT_PRIORITY,
    SORTABLE_COLUMNS,
    WEEK_DAYS,
)
from todoapp.models import QueryPlan, TaskFilter

SELECT_COLUMNS = "id, done, value, category, priority, due_date, notes"

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def priority_rank_sql() -> tuple[str, list[str]]:
    """CASE expression mapping priority labels to their rank, with its params."""
    whens = []
    params: list = []
    for label, rank in sorted(PRIORITY_RANK.items(), key=lambda kv: kv[1]):
        whens.append(f"WHEN ? THEN {rank:d}")
        params.append(label)
    # Rows that predate the priority column read back as medium.
    default_rank = PRIORITY_RANK[DEFAULT_PRIORITY]
    return f"CASE priority {' '.join(whens)} ELSE {default_rank:d} END", params


def build_where(filters: TaskFilter, today: date) -> tuple[list[str], list]:
    clauses = ["done = ?"]
    params: list = [1 if filters.done else 0]

    if filters.category != CATEGORY_ALL:
        clauses.append("category = ?")
        params.append(filters.category)

    if filters.search_text:
        clauses.append(f"value LIKE ? ESCAPE '{LIKE_ESCAPE}'")
        params.append(f"%{escape_like(filters.search_text)}%")

    if filters.priority != PRIORITY_ALL:
        clauses.append("priority = ?")
        params.append(filters.priority)

    if filters.due not in DUE_FILTERS:
        raise ValueError(f"Unknown due date filter: {filters.due!r}")
    if filters.due == DUE_TODAY:
        clauses.append("due_date = ?")
        params.append(today.isoformat())
    elif filters.due == DUE_WEEK:
        clauses.append("due_date BETWEEN ? AND ?")
        params.extend([today.isoformat(), (today + timedelta(days=WEEK_DAYS)).isoformat()])

    return clauses, params


def build_order_by(filters: TaskFilter) -> tuple[str, list]:
    if filters.sort_order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {filters.sort_order!r}")
    direction = "DESC" if filters.sort_order == SORT_DESC else "ASC"

    if filters.sort_by == SORT_PRIORITY:
        rank_sql, params = priority_rank_sql()
        return f"ORDER BY {rank_sql} {direction}, id ASC", params
    if filters.sort_by == SORT_DATE:
        return f"ORDER BY due_date IS NULL, due_date {direction}, id ASC", []
    if filters.sort_by in SORTABLE_COLUMNS:
        return f"ORDER BY {filters.sort_by} IS NULL, {filters.sort_by} {direction}, id ASC", []
    raise ValueError(f"Unknown sort column: {filters.sort_by!r}")


def build_query_plan(filters: TaskFilter, today: date) -> QueryPlan:
    clauses, params = build_where(filters, today)
    order_sql, order_params = build_order_by(filters)
    sql = (
        f"SELECT {SELECT_COLUMNS} FROM items "
        f"WHERE {' AND '.join(clauses)} "
        f"{order_sql};"
    )
    return QueryPlan(sql=sql, params=tuple(params + order_params))
