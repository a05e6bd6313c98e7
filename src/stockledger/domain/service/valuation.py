"""Valuation of on-hand stock in fixed-point (Decimal) arithmetic."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from stockledger.domain.model.stock_item import StockItem
from stockledger.domain.model.value_objects import Money


def total_value(current_stock: Decimal | int, unit_cost: Money) -> Money:
    return unit_cost * Decimal(current_stock)


def catalog_value(items: Iterable[StockItem], currency: str = "USD") -> Money:
    """Sum per-item values with Money addition, never float accumulation."""
    result = Money.zero(currency)
    for item in items:
        result = result + total_value(item.current_stock, item.unit_cost)
    return result
