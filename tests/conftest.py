from __future__ import annotations

from datetime import date, datetime, time, timezone
from pathlib import Path

import pytest

from todoapp.ports import Clock


class FixedClock(Clock):
    """Clock pinned to a settable calendar date."""

    def __init__(self, current: date) -> None:
        self.current = current

    def now(self) -> datetime:
        return datetime.combine(self.current, time(12, 0), tzinfo=timezone.utc)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(date(2024, 3, 15))


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "todo.db"
