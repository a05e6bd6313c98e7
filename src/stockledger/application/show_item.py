"""Application service: Show Item use case (query)."""

from __future__ import annotations

from decimal import Decimal

from stockledger.application.dto import StockItemDTO, item_dto
from stockledger.domain.exceptions import NotFoundError
from stockledger.domain.repository.stock_catalog import StockCatalog
from stockledger.domain.service.item_view import view_of


class ShowItemHandler:

    def __init__(
        self,
        catalog: StockCatalog,
        default_min_stock: Decimal | None = None,
    ) -> None:
        self._catalog = catalog
        self._default_min_stock = default_min_stock

    def handle(self, item_id: str, include_inactive: bool = False) -> StockItemDTO:
        item = self._catalog.get(item_id)
        if item is None:
            raise NotFoundError(f"Stock item '{item_id}' not found")
        if not item.is_active and not include_inactive:
            raise NotFoundError(f"Stock item '{item.name}' is inactive")
        return item_dto(view_of(item, self._default_min_stock))
