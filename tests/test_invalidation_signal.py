"""
Tests for the invalidation signal: counting, listeners, and which store
operations bump it.

Run with: python -m pytest tests/test_invalidation_signal.py -v
"""
from __future__ import annotations

import asyncio

from todoapp.models import TaskFilter
from todoapp.signal import InvalidationSignal
from todoapp.store import open_store


def test_bump_increments_and_notifies():
    signal = InvalidationSignal()
    seen: list[int] = []
    unsubscribe = signal.subscribe(seen.append)

    signal.bump()
    signal.bump()
    unsubscribe()
    signal.bump()

    assert signal.version == 3
    assert seen == [1, 2]


def test_failing_listener_does_not_block_others():
    signal = InvalidationSignal()
    seen: list[int] = []

    def broken(version: int) -> None:
        raise RuntimeError("boom")

    signal.subscribe(broken)
    signal.subscribe(seen.append)

    assert signal.bump() == 1
    assert seen == [1]


def test_every_write_bumps_and_reads_do_not(db_path, clock):
    async def run():
        store = await open_store(db_path, clock=clock)
        versions = [store.signal.version]
        task_id = await store.add_task("Task")
        versions.append(store.signal.version)
        await store.edit_task(task_id, "Task 2", None, "low", None, None)
        versions.append(store.signal.version)
        await store.toggle_done(task_id)
        versions.append(store.signal.version)
        await store.query(TaskFilter())
        await store.partitions(TaskFilter())
        await store.get_task(task_id)
        versions.append(store.signal.version)
        await store.delete_task(task_id)
        versions.append(store.signal.version)
        return versions

    assert asyncio.run(run()) == [0, 1, 2, 3, 3, 4]


def test_counter_starts_over_on_reopen(db_path, clock):
    async def run():
        first = await open_store(db_path, clock=clock)
        await first.add_task("One")
        await first.add_task("Two")
        second = await open_store(db_path, clock=clock)
        return first.signal.version, second.signal.version

    assert asyncio.run(run()) == (2, 0)
