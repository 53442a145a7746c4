"""
View invalidation signal.

A process-local version counter. Every successful write bumps it; readers
re-query when the version they rendered is older than the current one.
The counter is not persisted and starts over each time a store is opened.
"""
from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[int], None]


class InvalidationSignal:
    def __init__(self, initial: int = 0) -> None:
        self._version = initial
        self._listeners: list[Listener] = []

    @property
    def version(self) -> int:
        return self._version

    def bump(self) -> int:
        self._version += 1
        for fn in list(self._listeners):
            try:
                fn(self._version)
            except Exception:
                logger.exception("Invalidation listener failed (version=%s)", self._version)
        return self._version

    def subscribe(self, fn: Listener) -> Callable[[], None]:
        """Register fn(version); returns a callable that unsubscribes it."""
        self._listeners.append(fn)

        def unsubscribe() -> None:
            if fn in self._listeners:
                self._listeners.remove(fn)

        return unsubscribe
