# todoapp/infra/db/connection.py
from __future__ import annotations

import contextlib
from typing import Any, AsyncIterator, Optional, Sequence

import aiosqlite


class Database:
    """
    Async SQLite helper:
    - opens a new connection per operation (simple + safe)
    - sets row_factory to aiosqlite.Row
    - enables foreign keys on every connection
    - every write runs in its own transaction, committed before returning
    """

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    @contextlib.asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        async with aiosqlite.connect(self._path) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys=ON;")
            yield db

    async def enable_wal(self) -> str:
        """Switch the file to WAL journaling (persistent); returns the resulting mode."""
        async with self.connect() as db:
            cur = await db.execute("PRAGMA journal_mode=WAL;")
            row = await cur.fetchone()
            return str(row[0]) if row else ""

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        async with self.connect() as db:
            try:
                yield db
            except BaseException:
                await db.rollback()
                raise
            await db.commit()

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> aiosqlite.Cursor:
        """Run one write statement; returns the cursor for rowcount/lastrowid."""
        async with self.transaction() as db:
            return await db.execute(sql, params)

    async def fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        async with self.connect() as db:
            cur = await db.execute(sql, params)
            return await cur.fetchone()

    async def fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[aiosqlite.Row]:
        async with self.connect() as db:
            cur = await db.execute(sql, params)
            return list(await cur.fetchall())
