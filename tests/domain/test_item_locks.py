"""Unit tests for the per-item lock registry."""

import threading

import pytest

from stockledger.domain.exceptions import ConcurrencyConflictError
from stockledger.domain.service.item_locks import ItemLockRegistry


class TestItemLockRegistry:

    def test_same_item_times_out_while_held(self):
        locks = ItemLockRegistry()
        with locks.hold("a", timeout=1):
            with pytest.raises(ConcurrencyConflictError, match="Timed out"):
                with locks.hold("a", timeout=0.01):
                    pass

    def test_other_items_are_free(self):
        locks = ItemLockRegistry()
        with locks.hold("a", timeout=1):
            with locks.hold("b", timeout=0.01):
                pass

    def test_lock_released_after_exception(self):
        locks = ItemLockRegistry()
        with pytest.raises(RuntimeError):
            with locks.hold("a", timeout=1):
                raise RuntimeError("boom")
        with locks.hold("a", timeout=0.01):
            pass

    def test_serializes_threads(self):
        locks = ItemLockRegistry()
        counter = {"value": 0}

        def bump():
            for _ in range(200):
                with locks.hold("a", timeout=5):
                    current = counter["value"]
                    counter["value"] = current + 1

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert counter["value"] == 800
