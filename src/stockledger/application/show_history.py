"""Application service: Show History use case (query)."""

from __future__ import annotations

from stockledger.application.dto import HistoryPageDTO, adjustment_dto
from stockledger.domain.exceptions import NotFoundError
from stockledger.domain.model.value_objects import Page
from stockledger.domain.repository.adjustment_ledger import AdjustmentLedger
from stockledger.domain.repository.stock_catalog import StockCatalog


class ShowHistoryHandler:

    def __init__(
        self,
        catalog: StockCatalog,
        ledger: AdjustmentLedger,
        page_size: int = 100,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._page_size = page_size

    def handle(self, item_id: str, page: int = 1, size: int | None = None) -> HistoryPageDTO:
        """Newest-first page of adjustments.

        Deactivated items keep their history, so they are not rejected here.
        """
        item = self._catalog.get(item_id)
        if item is None:
            raise NotFoundError(f"Stock item '{item_id}' not found")

        selector = Page(number=page, size=size or self._page_size)
        records = self._ledger.query(item.id, selector)
        return HistoryPageDTO(
            item_id=item.id,
            item_name=item.name,
            page=selector.number,
            size=selector.size,
            total=self._ledger.count(item.id),
            records=[adjustment_dto(r) for r in records],
        )
