from dataclasses import dataclass
import logging
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from todoapp.constants import STORAGE_NONE, STORAGE_SQLITE

load_dotenv()


@dataclass(frozen=True)
class Settings:
    db_path: Path
    timezone: str
    log_level: str
    storage_backend: str


def load_settings() -> Settings:
    db_raw = os.getenv("TODO_DB_PATH", "data/todo.db").strip()
    tz = os.getenv("TZ", "UTC").strip() or "UTC"
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    backend = os.getenv("TODO_STORAGE", STORAGE_SQLITE).strip().lower()

    if not db_raw:
        raise RuntimeError("TODO_DB_PATH is empty")
    if backend not in (STORAGE_SQLITE, STORAGE_NONE):
        raise RuntimeError(f"TODO_STORAGE must be '{STORAGE_SQLITE}' or '{STORAGE_NONE}', got {backend!r}")
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"LOG_LEVEL invalid: {log_level!r}")
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise RuntimeError(f"TZ invalid: {tz!r}") from None

    return Settings(
        db_path=Path(db_raw),
        timezone=tz,
        log_level=log_level,
        storage_backend=backend,
    )
