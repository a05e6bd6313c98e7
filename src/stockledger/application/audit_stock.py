"""Application service: Audit Stock use case (query).

Replays each item's ledger and compares the result with the catalog.
"""

from __future__ import annotations

from stockledger.domain.exceptions import NotFoundError
from stockledger.domain.model.stock_item import ItemFilter
from stockledger.domain.repository.adjustment_ledger import AdjustmentLedger
from stockledger.domain.repository.stock_catalog import StockCatalog
from stockledger.domain.service.ledger_replay import ReplayReport, audit


class AuditStockHandler:

    def __init__(self, catalog: StockCatalog, ledger: AdjustmentLedger) -> None:
        self._catalog = catalog
        self._ledger = ledger

    def handle(self, item_id: str) -> ReplayReport:
        item = self._catalog.get(item_id)
        if item is None:
            raise NotFoundError(f"Stock item '{item_id}' not found")
        return audit(item, self._ledger.history(item.id))

    def handle_all(self) -> list[ReplayReport]:
        return [
            audit(item, self._ledger.history(item.id))
            for item in self._catalog.list(ItemFilter(active=None))
        ]
