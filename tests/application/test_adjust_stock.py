"""Integration tests for the AdjustStock use case."""

from decimal import Decimal

from stockledger.application.adjust_stock import AdjustStockHandler
from stockledger.application.show_history import ShowHistoryHandler
from stockledger.domain.exceptions import InsufficientStockError
from stockledger.domain.model.stock_item import StockItem
from stockledger.domain.service.adjustment_processor import AdjustmentProcessor
from tests.fakes import FakeAdjustmentLedger, FakeStockCatalog


def _setup(stock="20"):
    item = StockItem.create(kind="product", name="Brownie", min_stock=10, max_stock=100)
    item.current_stock = Decimal(stock)
    catalog = FakeStockCatalog([item])
    ledger = FakeAdjustmentLedger()
    handler = AdjustStockHandler(AdjustmentProcessor(catalog, ledger))
    return item, catalog, ledger, handler


class TestAdjustStock:

    def test_returns_dto_with_status_and_value(self):
        item, _, _, handler = _setup()
        dto = handler.handle(item.id, "remove", "12", "sale", None, "bob")
        assert dto.current_stock == Decimal("8")
        assert dto.status == "low"
        assert dto.name == "Brownie"

    def test_sequence_conserves_stock(self):
        item, catalog, ledger, handler = _setup(stock="0")
        requests = [("add", 7), ("remove", 3), ("remove", 9), ("add", 2), ("remove", 6)]
        expected = Decimal("0")
        for operation, quantity in requests:
            try:
                handler.handle(item.id, operation, quantity, "manual_adjustment", "", "bob")
            except InsufficientStockError:
                continue
            expected += quantity if operation == "add" else -quantity

        assert catalog.get(item.id).current_stock == expected == Decimal("0")
        assert ledger.count(item.id) == 4

    def test_history_is_newest_first(self):
        item, catalog, ledger, handler = _setup()
        handler.handle(item.id, "add", 1, "purchase", "first", "bob")
        handler.handle(item.id, "add", 2, "purchase", "second", "bob")
        handler.handle(item.id, "remove", 3, "sale", "third", "bob")

        history = ShowHistoryHandler(catalog, ledger, page_size=2)
        page_one = history.handle(item.id)
        assert [r.notes for r in page_one.records] == ["third", "second"]
        assert page_one.total == 3
        assert page_one.has_more

        page_two = history.handle(item.id, page=2)
        assert [r.notes for r in page_two.records] == ["first"]
        assert not page_two.has_more
