"""Per-item exclusive locks for the adjustment critical section.

Adjustments on the same item are serialized; adjustments on different
items never wait on each other. The registry mutex is held only while
looking up or creating an item's lock, never while that lock is held.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from stockledger.domain.exceptions import ConcurrencyConflictError


class ItemLockRegistry:

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, item_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(item_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[item_id] = lock
            return lock

    @contextmanager
    def hold(self, item_id: str, timeout: float) -> Iterator[None]:
        """Hold the item's lock, or raise ConcurrencyConflictError after ``timeout`` seconds."""
        lock = self._lock_for(item_id)
        if not lock.acquire(timeout=timeout):
            raise ConcurrencyConflictError(
                f"Timed out after {timeout}s waiting for item {item_id}"
            )
        try:
            yield
        finally:
            lock.release()
