# -*- coding: utf-8 -*-
"""
Schema for the items table and its tag scaffold.

The live column set is the schema version: on every open the table is
introspected with PRAGMA table_info and any missing column from
ADDITIVE_COLUMNS is added. Columns are never dropped or renamed.
"""
from __future__ import annotations

import logging
from typing import NamedTuple

import aiosqlite

logger = logging.getLogger(__name__)

ITEMS_TABLE = "items"


class Column(NamedTuple):
    name: str
    decl: str


# Columns added after the base table existed. Append new ones here.
ADDITIVE_COLUMNS: tuple[Column, ...] = (
    Column("category", "TEXT"),
    Column("priority", "TEXT NOT NULL DEFAULT 'medium'"),
    Column("due_date", "TEXT"),
    Column("notes", "TEXT"),
)


async def table_columns(db: aiosqlite.Connection, table: str) -> set[str]:
    cursor = await db.execute(f"PRAGMA table_info({table})")
    return {row[1] for row in await cursor.fetchall()}


async def ensure_schema(db: aiosqlite.Connection) -> list[str]:
    """
    Create or upgrade the schema in place. Idempotent.

    Returns the names of the columns added by this call.
    """
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS items (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            done INTEGER NOT NULL DEFAULT 0,
            value TEXT NOT NULL
        );
        """
    )

    columns = await table_columns(db, ITEMS_TABLE)
    added = []
    for col in ADDITIVE_COLUMNS:
        if col.name in columns:
            continue
        await db.execute(f"ALTER TABLE {ITEMS_TABLE} ADD COLUMN {col.name} {col.decl};")
        logger.info("Schema migration: added column %s.%s", ITEMS_TABLE, col.name)
        added.append(col.name)

    await db.execute("CREATE INDEX IF NOT EXISTS idx_items_done ON items(done);")

    # Tag scaffold: declared, not used by any operation yet.
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS tags (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE
        );
        """
    )
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS item_tags (
            item_id INTEGER NOT NULL,
            tag_id INTEGER NOT NULL,
            PRIMARY KEY (item_id, tag_id),
            FOREIGN KEY (item_id) REFERENCES items(id),
            FOREIGN KEY (tag_id) REFERENCES tags(id)
        );
        """
    )
    return added
