"""Stock status classification.

One function decides ``ok`` / ``low`` / ``out`` for every caller: single
item views, catalog listings and the low-stock query all go through
``classify``.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from stockledger.domain.exceptions import ValidationError


class StockStatus(Enum):
    OK = "ok"
    LOW = "low"
    OUT = "out"

    @staticmethod
    def parse(raw: str | StockStatus) -> StockStatus:
        if isinstance(raw, StockStatus):
            return raw
        try:
            return StockStatus(str(raw).strip().lower())
        except ValueError:
            raise ValidationError("Status must be one of: ok, low, out")

    @property
    def needs_restock(self) -> bool:
        return self is not StockStatus.OK


def classify(
    current_stock: Decimal | int,
    min_stock: Decimal | int | None,
    default_min_stock: Decimal | int | None = None,
) -> StockStatus:
    """Classify a stock level.

    The per-item ``min_stock`` wins over ``default_min_stock``; the default
    is only consulted when the item has no threshold of its own. With no
    threshold at all an item is either ``out`` or ``ok``.
    """
    if current_stock <= 0:
        return StockStatus.OUT
    threshold = min_stock if min_stock is not None else default_min_stock
    if threshold is not None and current_stock <= threshold:
        return StockStatus.LOW
    return StockStatus.OK
