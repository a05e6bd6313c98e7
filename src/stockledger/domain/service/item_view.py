"""Derived, display-only view of a StockItem: status and total value.

Nothing here is persisted; it is recomputed from the item every time.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stockledger.domain.model.stock_item import StockItem
from stockledger.domain.model.value_objects import Money
from stockledger.domain.service.status_classifier import StockStatus, classify
from stockledger.domain.service.valuation import total_value


@dataclass(frozen=True)
class StockItemView:
    item: StockItem
    status: StockStatus
    total_value: Money


def view_of(item: StockItem, default_min_stock: Decimal | None = None) -> StockItemView:
    return StockItemView(
        item=item,
        status=classify(item.current_stock, item.min_stock, default_min_stock),
        total_value=total_value(item.current_stock, item.unit_cost),
    )
