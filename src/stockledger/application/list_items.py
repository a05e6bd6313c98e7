"""Application service: List Items use case (query).

Status filtering uses the same classifier as single-item views, so
"low" here means exactly what it means on an item's detail page.
"""

from __future__ import annotations

from decimal import Decimal

from stockledger.application.dto import StockItemDTO, item_dto
from stockledger.domain.model.stock_item import ItemFilter, ItemKind
from stockledger.domain.repository.stock_catalog import StockCatalog
from stockledger.domain.service.item_view import StockItemView, view_of
from stockledger.domain.service.status_classifier import StockStatus


class ListItemsHandler:

    def __init__(
        self,
        catalog: StockCatalog,
        default_min_stock: Decimal | None = None,
    ) -> None:
        self._catalog = catalog
        self._default_min_stock = default_min_stock

    def handle(
        self,
        kind: str | None = None,
        status: str | None = None,
        active: bool | None = True,
    ) -> list[StockItemDTO]:
        views = self._views(kind, active)
        if status is not None:
            wanted = StockStatus.parse(status)
            views = [v for v in views if v.status is wanted]
        return [item_dto(v) for v in views]

    def low_stock(self, kind: str | None = None) -> list[StockItemDTO]:
        """Active items that are low or out, emptiest first."""
        views = [v for v in self._views(kind, True) if v.status.needs_restock]
        views.sort(key=lambda v: (v.item.current_stock, v.item.name.lower()))
        return [item_dto(v) for v in views]

    def _views(self, kind: str | None, active: bool | None) -> list[StockItemView]:
        item_filter = ItemFilter(
            kind=ItemKind.parse(kind) if kind is not None else None,
            active=active,
        )
        return [
            view_of(item, self._default_min_stock)
            for item in self._catalog.list(item_filter)
        ]
