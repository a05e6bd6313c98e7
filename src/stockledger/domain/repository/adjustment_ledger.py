"""Abstract repository for the append-only adjustment ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockledger.domain.model.adjustment import AdjustmentRecord
from stockledger.domain.model.value_objects import Page


class AdjustmentLedger(ABC):
    """Append-only store. There is deliberately no update or delete."""

    @abstractmethod
    def append(self, record: AdjustmentRecord) -> None:
        """Persist a record.

        Raises PersistenceError on storage failure, leaving nothing behind.
        """

    @abstractmethod
    def history(self, item_id: str) -> list[AdjustmentRecord]:
        """All records for an item, oldest first."""

    def query(self, item_id: str, page: Page) -> list[AdjustmentRecord]:
        """One page of records for an item, newest first."""
        newest_first = list(reversed(self.history(item_id)))
        return newest_first[page.offset:page.offset + page.size]

    def count(self, item_id: str) -> int:
        return len(self.history(item_id))
