"""
Utility functions for validating task fields and parsing dates.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from todoapp.constants import CATEGORIES, DEFAULT_PRIORITY, PRIORITIES
from todoapp.errors import TaskValidationError


def parse_due_date(value: Union[str, date, None]) -> Optional[str]:
    """
    Normalize a due date to a YYYY-MM-DD string.

    Accepts a date, an ISO date string, or None/blank (no due date).
    Datetimes are reduced to their calendar date; no timezone conversion is done.
    """
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()[:10]
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        raise TaskValidationError(f"Invalid due date: {value!r}") from None


def validate_task_fields(
    value: Optional[str],
    category: Optional[str],
    priority: Optional[str],
    due_date: Union[str, date, None],
    notes: Optional[str],
) -> tuple[str, Optional[str], str, Optional[str], Optional[str]]:
    """Check and normalize task fields. Raises TaskValidationError."""
    if value is None or not value.strip():
        raise TaskValidationError("Task cannot be empty.")
    if category is not None and category not in CATEGORIES:
        raise TaskValidationError(f"Unknown category: {category!r}")
    if priority is None:
        priority = DEFAULT_PRIORITY
    elif priority not in PRIORITIES:
        raise TaskValidationError(f"Unknown priority: {priority!r}")
    if notes is not None and not notes.strip():
        notes = None
    return value, category, priority, parse_due_date(due_date), notes
