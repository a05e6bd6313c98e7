"""Integration tests for the CreateItem use case."""

from decimal import Decimal

import pytest

from stockledger.application.create_item import CreateItemHandler
from stockledger.domain.exceptions import PersistenceError, ValidationError
from stockledger.domain.service.adjustment_processor import AdjustmentProcessor
from stockledger.domain.service.ledger_replay import audit
from tests.fakes import FailingAdjustmentLedger, FakeAdjustmentLedger, FakeStockCatalog


def _setup():
    catalog = FakeStockCatalog()
    ledger = FakeAdjustmentLedger()
    processor = AdjustmentProcessor(catalog, ledger, default_min_stock=Decimal("10"))
    handler = CreateItemHandler(catalog, processor, default_min_stock=Decimal("10"))
    return catalog, ledger, handler


class TestCreateItem:

    def test_create_without_opening_stock(self):
        catalog, ledger, handler = _setup()
        dto = handler.handle(kind="ingredient", name="Basil", actor_id="alice", unit="g")

        assert dto.current_stock == Decimal("0")
        assert dto.status == "out"
        assert ledger.count(dto.id) == 0
        assert catalog.get(dto.id).name == "Basil"

    def test_opening_stock_is_booked_in_ledger(self):
        catalog, ledger, handler = _setup()
        dto = handler.handle(
            kind="product", name="Cheesecake", actor_id="alice",
            min_stock="4", max_stock="30", unit_cost="3.50", initial_stock="12",
        )

        assert dto.current_stock == Decimal("12")
        assert dto.status == "ok"
        assert dto.total_value.amount == Decimal("42.00")
        [record] = ledger.history(dto.id)
        assert record.reason.value == "inventory_count"
        assert record.notes == "Opening balance"
        assert (record.previous_stock, record.new_stock) == (Decimal("0"), Decimal("12"))
        assert audit(catalog.get(dto.id), ledger.history(dto.id)).is_consistent

    def test_duplicate_name_within_kind_rejected(self):
        _, _, handler = _setup()
        handler.handle(kind="ingredient", name="Basil", actor_id="alice")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle(kind="ingredient", name="basil", actor_id="alice")

    def test_same_name_in_other_kind_allowed(self):
        _, _, handler = _setup()
        handler.handle(kind="ingredient", name="Lemonade", actor_id="alice")
        dto = handler.handle(kind="product", name="Lemonade", actor_id="alice")
        assert dto.kind == "product"

    def test_negative_opening_stock_rejected(self):
        catalog, _, handler = _setup()
        with pytest.raises(ValidationError, match="initial_stock cannot be negative"):
            handler.handle(kind="product", name="Pie", actor_id="alice", initial_stock=-2)
        assert catalog.list() == []

    def test_failed_opening_balance_leaves_no_item(self):
        catalog = FakeStockCatalog()
        ledger = FailingAdjustmentLedger(failures=1)
        processor = AdjustmentProcessor(catalog, ledger, sleep=lambda _: None)
        handler = CreateItemHandler(catalog, processor)

        with pytest.raises(PersistenceError, match="disk full"):
            handler.handle(kind="ingredient", name="Salt", actor_id="bob", initial_stock=5)
        assert catalog.list() == []

        dto = handler.handle(kind="ingredient", name="Salt", actor_id="bob", initial_stock=5)
        assert dto.current_stock == Decimal("5")
        assert ledger.count(dto.id) == 1

    def test_actor_required(self):
        catalog, _, handler = _setup()
        with pytest.raises(ValidationError, match="actor_id"):
            handler.handle(kind="product", name="Pie", actor_id=" ", initial_stock=2)
        assert catalog.list() == []
