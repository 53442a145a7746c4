"""Exceptions raised by the task store."""
from __future__ import annotations


class TaskValidationError(ValueError):
    """Task fields rejected before any write is attempted."""


class StoreOpenError(RuntimeError):
    """The store could not be opened or migrated. Not retryable."""
