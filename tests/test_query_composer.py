"""
Tests for the query composer: parameter binding, filter independence,
priority rank ordering, NULL due-date placement and date windows.

Run with: python -m pytest tests/test_query_composer.py -v
"""
from __future__ import annotations

import asyncio
from datetime import date, timedelta

import pytest

from todoapp.models import TaskFilter
from todoapp.query import build_query_plan, escape_like
from todoapp.store import TaskStore, open_store

TODAY = date(2024, 3, 15)


# ----- plan building (pure, no DB) -----


def test_no_optional_filters_only_constrains_partition():
    plan = build_query_plan(TaskFilter(done=True), TODAY)
    where = plan.sql.split("WHERE", 1)[1].split("ORDER BY", 1)[0]
    assert where.strip() == "done = ?"
    assert plan.params == (1,)


def test_all_filters_are_bound_as_parameters():
    """User text never appears in the SQL string."""
    evil = "x'; DROP TABLE items; --"
    plan = build_query_plan(
        TaskFilter(category="Work", search_text=evil, priority="high", due="today"),
        TODAY,
    )
    assert evil not in plan.sql
    assert "Work" not in plan.sql
    assert "high" not in plan.sql
    assert plan.params == (0, "Work", f"%{evil}%", "high", "2024-03-15")


def test_priority_sort_uses_rank_not_label():
    plan = build_query_plan(TaskFilter(sort_by="priority"), TODAY)
    assert "CASE priority" in plan.sql
    assert plan.params[-3:] == ("high", "medium", "low")


def test_week_filter_window_is_inclusive_seven_days():
    plan = build_query_plan(TaskFilter(due="week"), TODAY)
    assert "BETWEEN ? AND ?" in plan.sql
    assert plan.params == (0, "2024-03-15", "2024-03-22")


@pytest.mark.parametrize(
    "filters",
    [
        TaskFilter(sort_by="value; DROP TABLE items"),
        TaskFilter(sort_order="sideways"),
        TaskFilter(due="month"),
    ],
)
def test_unknown_options_are_rejected(filters):
    with pytest.raises(ValueError):
        build_query_plan(filters, TODAY)


def test_escape_like_makes_wildcards_literal():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


# ----- executed against a real DB -----


def _run(db_path, clock, test_fn):
    async def runner():
        store = await open_store(db_path, clock=clock)
        return await test_fn(store)

    return asyncio.run(runner())


async def _values(store: TaskStore, **kw) -> list[str]:
    return [t.value for t in await store.query(TaskFilter(**kw))]


def test_priority_sort_ignores_insertion_and_lexical_order(db_path, clock):
    async def run(store: TaskStore):
        await store.add_task("low-1", priority="low")
        await store.add_task("medium-1", priority="medium")
        await store.add_task("high-1", priority="high")
        await store.add_task("low-2", priority="low")
        await store.add_task("high-2", priority="high")
        asc = await _values(store, sort_by="priority", sort_order="asc")
        desc = await _values(store, sort_by="priority", sort_order="desc")
        return asc, desc

    asc, desc = _run(db_path, clock, run)
    # Ties keep insertion order.
    assert asc == ["high-1", "high-2", "medium-1", "low-1", "low-2"]
    assert desc == ["low-1", "low-2", "medium-1", "high-1", "high-2"]


def test_date_sort_puts_missing_dates_last_both_ways(db_path, clock):
    async def run(store: TaskStore):
        await store.add_task("none-1")
        await store.add_task("late", due_date="2024-04-01")
        await store.add_task("early", due_date="2024-03-01")
        await store.add_task("none-2")
        asc = await _values(store, sort_by="date", sort_order="asc")
        desc = await _values(store, sort_by="date", sort_order="desc")
        return asc, desc

    asc, desc = _run(db_path, clock, run)
    assert asc == ["early", "late", "none-1", "none-2"]
    assert desc == ["late", "early", "none-1", "none-2"]


def test_plain_column_sort(db_path, clock):
    async def run(store: TaskStore):
        for v in ("banana", "apple", "cherry"):
            await store.add_task(v)
        return await _values(store, sort_by="value", sort_order="desc")

    assert _run(db_path, clock, run) == ["cherry", "banana", "apple"]


def test_today_filter_includes_today_excludes_yesterday(db_path, clock):
    async def run(store: TaskStore):
        today = clock.today()
        await store.add_task("due today", due_date=today)
        await store.add_task("due yesterday", due_date=today - timedelta(days=1))
        await store.add_task("no date")
        return await _values(store, due="today")

    assert _run(db_path, clock, run) == ["due today"]


def test_week_filter_bounds(db_path, clock):
    async def run(store: TaskStore):
        today = clock.today()
        for offset in (-1, 0, 3, 7, 8):
            await store.add_task(f"d{offset}", due_date=today + timedelta(days=offset))
        return await _values(store, due="week", sort_by="date")

    assert _run(db_path, clock, run) == ["d0", "d3", "d7"]


def test_date_filters_follow_the_clock_without_writes(db_path, clock):
    """Same query, next day, different answer: today is read per query."""

    async def run(store: TaskStore):
        await store.add_task("tomorrow's job", due_date=clock.today() + timedelta(days=1))
        before = await _values(store, due="today")
        version = store.signal.version
        clock.current = clock.current + timedelta(days=1)
        after = await _values(store, due="today")
        return before, after, version, store.signal.version

    before, after, v1, v2 = _run(db_path, clock, run)
    assert before == []
    assert after == ["tomorrow's job"]
    assert v1 == v2


def test_category_and_priority_filters_commute(db_path, clock):
    """Both filters at once equal two sequential narrowings in either order."""

    async def run(store: TaskStore):
        await store.add_task("w-high", "Work", "high")
        await store.add_task("w-low", "Work", "low")
        await store.add_task("p-high", "Personal", "high")
        await store.add_task("s-medium", "Shopping")

        combined = {t.id for t in await store.query(TaskFilter(category="Work", priority="high"))}
        by_category = {t.id for t in await store.query(TaskFilter(category="Work"))}
        by_priority = {t.id for t in await store.query(TaskFilter(priority="high"))}
        return combined, by_category & by_priority

    combined, narrowed = _run(db_path, clock, run)
    assert combined == narrowed
    assert len(combined) == 1


def test_search_is_case_insensitive_substring(db_path, clock):
    async def run(store: TaskStore):
        await store.add_task("Buy Milk")
        await store.add_task("milkshake")
        await store.add_task("Bread")
        await store.add_task("50% discount")
        await store.add_task("500 discount")
        found = await _values(store, search_text="MILK", sort_by="id")
        pct = await _values(store, search_text="50%", sort_by="id")
        return found, pct

    found, pct = _run(db_path, clock, run)
    assert found == ["Buy Milk", "milkshake"]
    assert pct == ["50% discount"]


def test_filters_apply_per_partition(db_path, clock):
    async def run(store: TaskStore):
        a = await store.add_task("work open", "Work")
        b = await store.add_task("work done", "Work")
        await store.add_task("home open", "Personal")
        await store.toggle_done(b)
        return await store.partitions(TaskFilter(category="Work"))

    todo, done = _run(db_path, clock, run)
    assert [t.value for t in todo] == ["work open"]
    assert [t.value for t in done] == ["work done"]
