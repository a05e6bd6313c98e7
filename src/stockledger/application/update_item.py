"""Application service: Update Item use case.

Edits catalogue details and deactivates items. Quantity is not editable
here; it changes only through adjustments. Edits hold the same per-item
lock as adjustments, so a details write never lands on a stale quantity.
"""

from __future__ import annotations

from decimal import Decimal

from stockledger.application.dto import StockItemDTO, item_dto
from stockledger.domain.exceptions import NotFoundError
from stockledger.domain.model.stock_item import StockItem
from stockledger.domain.model.value_objects import Money
from stockledger.domain.repository.stock_catalog import StockCatalog
from stockledger.domain.service.item_locks import ItemLockRegistry
from stockledger.domain.service.item_view import view_of


class UpdateItemHandler:

    def __init__(
        self,
        catalog: StockCatalog,
        default_min_stock: Decimal | None = None,
        locks: ItemLockRegistry | None = None,
        lock_timeout: float = 2.0,
    ) -> None:
        self._catalog = catalog
        self._default_min_stock = default_min_stock
        self._locks = locks or ItemLockRegistry()
        self._lock_timeout = lock_timeout

    def handle(
        self,
        item_id: str,
        name: str | None = None,
        unit: str | None = None,
        min_stock: object = None,
        max_stock: object = None,
        unit_cost: object = None,
        description: str | None = None,
        supplier: str | None = None,
    ) -> StockItemDTO:
        """Edit details. ``None`` leaves a field as is; ``""`` clears a threshold."""
        with self._locks.hold(item_id, timeout=self._lock_timeout):
            item = self._require_active(item_id)
            item.update_details(
                name=name,
                unit=unit,
                min_stock=min_stock,
                max_stock=max_stock,
                unit_cost=(
                    Money.of(unit_cost, item.unit_cost.currency)
                    if unit_cost is not None
                    else None
                ),
                description=description,
                supplier=supplier,
            )
            saved = self._catalog.update(item)
        return item_dto(view_of(saved, self._default_min_stock))

    def deactivate(self, item_id: str) -> StockItemDTO:
        """Soft-delete: the item and its ledger are kept for audit."""
        with self._locks.hold(item_id, timeout=self._lock_timeout):
            item = self._require_active(item_id)
            item.deactivate()
            saved = self._catalog.update(item)
        return item_dto(view_of(saved, self._default_min_stock))

    def _require_active(self, item_id: str) -> StockItem:
        item = self._catalog.get(item_id)
        if item is None:
            raise NotFoundError(f"Stock item '{item_id}' not found")
        if not item.is_active:
            raise NotFoundError(f"Stock item '{item.name}' is inactive")
        return item
