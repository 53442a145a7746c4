"""
Constants for task fields, filters and sort options.
"""
from __future__ import annotations

# Task priority (stored in items.priority)
PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"
PRIORITIES = (PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)
DEFAULT_PRIORITY = PRIORITY_MEDIUM

# Rank used for ORDER BY (lexical order would put "low" before "medium")
PRIORITY_RANK = {
    PRIORITY_HIGH: 1,
    PRIORITY_MEDIUM: 2,
    PRIORITY_LOW: 3,
}

# Category labels (stored in items.category, NULL when unset)
CATEGORIES = ("Work", "Personal", "Shopping", "Health", "Other")

# Filter sentinels
CATEGORY_ALL = "All"
PRIORITY_ALL = "all"

DUE_ALL = "all"
DUE_TODAY = "today"
DUE_WEEK = "week"
DUE_FILTERS = (DUE_ALL, DUE_TODAY, DUE_WEEK)
WEEK_DAYS = 7

# Sorting
SORT_DATE = "date"
SORT_PRIORITY = "priority"
SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_ORDERS = (SORT_ASC, SORT_DESC)

# Plain columns accepted as sortBy besides date/priority
SORTABLE_COLUMNS = ("id", "value", "category", "notes", "done")

# Storage backends
STORAGE_SQLITE = "sqlite"
STORAGE_NONE = "none"

# sys.platform values without a usable file-backed sqlite
UNSUPPORTED_PLATFORMS = ("emscripten", "wasi")
