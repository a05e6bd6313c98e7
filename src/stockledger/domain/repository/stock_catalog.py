"""Abstract repository for the StockItem aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from stockledger.domain.model.stock_item import ItemFilter, StockItem


class StockCatalog(ABC):

    @abstractmethod
    def get(self, item_id: str) -> StockItem | None:
        """Return the item with this ID, or None."""

    @abstractmethod
    def list(self, item_filter: ItemFilter | None = None) -> list[StockItem]:
        """Return matching items ordered by (kind, name, id)."""

    @abstractmethod
    def create(self, item: StockItem) -> StockItem:
        """Persist a new item.

        Raises ValidationError if another item of the same kind already
        uses this name (case-insensitive).
        """

    @abstractmethod
    def update(self, item: StockItem) -> StockItem:
        """Persist catalogue details of an existing item.

        The stored ``current_stock`` and ``last_restocked_at`` are kept;
        quantity only changes through ``set_quantity``. Raises
        ConcurrencyConflictError if the stored version differs from
        ``item.version``.
        """

    @abstractmethod
    def discard(self, item_id: str) -> None:
        """Remove an item that never held stock.

        Only used to undo a create whose opening balance could not be
        booked. Raises ValidationError if the item has stock on hand.
        """

    @abstractmethod
    def set_quantity(
        self,
        item_id: str,
        new_value: Decimal,
        *,
        expected_version: int,
        last_restocked_at: datetime | None,
    ) -> StockItem:
        """Write a new on-hand quantity. Reserved for the AdjustmentProcessor.

        Raises ConcurrencyConflictError if the stored version differs from
        ``expected_version``, ValidationError if ``new_value`` is negative
        and PersistenceError if storage fails.
        """


def catalog_order(item: StockItem) -> tuple[str, str, str]:
    """Stable listing order shared by every catalog implementation."""
    return (item.kind.value, item.name.lower(), item.id)
