"""Unit tests for ledger replay and the stock audit."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from stockledger.domain.model.adjustment import AdjustmentReason, AdjustmentRecord, Operation
from stockledger.domain.model.stock_item import StockItem
from stockledger.domain.service.ledger_replay import audit, replay

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _rec(item_id, n, op, qty, before, after):
    return AdjustmentRecord(
        item_id=item_id,
        operation=op,
        quantity=Decimal(qty),
        reason=AdjustmentReason.MANUAL_ADJUSTMENT,
        previous_stock=Decimal(before),
        new_stock=Decimal(after),
        actor_id="alice",
        created_at=T0 + timedelta(minutes=n),
    )


def _item(stock):
    item = StockItem.create(kind="product", name="Lemonade")
    item.current_stock = Decimal(stock)
    return item


class TestReplay:

    def test_empty_history(self):
        assert replay([]) == Decimal("0")

    def test_replays_in_created_at_order(self):
        records = [
            _rec("i", 2, Operation.REMOVE, "3", "15", "12"),
            _rec("i", 1, Operation.ADD, "5", "10", "15"),
        ]
        assert replay(records) == Decimal("12")

    def test_explicit_opening(self):
        records = [_rec("i", 1, Operation.ADD, "5", "10", "15")]
        assert replay(records, opening=Decimal("0")) == Decimal("5")


class TestAudit:

    def test_consistent_history(self):
        item = _item("12")
        records = [
            _rec(item.id, 0, Operation.ADD, "10", "0", "10"),
            _rec(item.id, 1, Operation.ADD, "5", "10", "15"),
            _rec(item.id, 2, Operation.REMOVE, "3", "15", "12"),
        ]
        report = audit(item, records)
        assert report.is_consistent
        assert report.replayed_stock == Decimal("12")
        assert report.record_count == 3

    def test_gap_in_history_detected(self):
        item = _item("12")
        records = [
            _rec(item.id, 0, Operation.ADD, "10", "0", "10"),
            _rec(item.id, 1, Operation.REMOVE, "3", "15", "12"),
        ]
        report = audit(item, records)
        assert not report.is_consistent
        assert any("previous record ended at 10" in p for p in report.problems)

    def test_catalog_drift_detected(self):
        item = _item("11")
        records = [_rec(item.id, 0, Operation.ADD, "12", "0", "12")]
        report = audit(item, records)
        assert report.problems == ["Replayed stock 12 does not match current stock 11"]

    def test_item_without_history_at_zero_is_consistent(self):
        assert audit(_item("0"), []).is_consistent

    def test_item_without_history_but_stock_is_flagged(self):
        assert not audit(_item("4"), []).is_consistent
