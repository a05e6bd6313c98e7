"""Unit tests for AdjustmentRecord and the reason/operation enums."""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.adjustment import (
    AdjustmentReason,
    AdjustmentRecord,
    Operation,
    bounded_notes,
)


def _record(**overrides):
    fields = dict(
        item_id="item-1",
        operation=Operation.ADD,
        quantity=Decimal("5"),
        reason=AdjustmentReason.PURCHASE,
        previous_stock=Decimal("20"),
        new_stock=Decimal("25"),
        actor_id="alice",
    )
    fields.update(overrides)
    return AdjustmentRecord(**fields)


class TestAdjustmentRecord:

    def test_add_record(self):
        record = _record()
        assert record.delta == Decimal("5")
        assert record.id
        assert record.created_at.tzinfo is not None

    def test_remove_record(self):
        record = _record(operation=Operation.REMOVE, new_stock=Decimal("15"))
        assert record.delta == Decimal("-5")

    def test_inconsistent_arithmetic_rejected(self):
        with pytest.raises(ValidationError, match="Inconsistent adjustment"):
            _record(new_stock=Decimal("24"))

    def test_negative_result_rejected(self):
        with pytest.raises(ValidationError, match="negative stock"):
            _record(
                operation=Operation.REMOVE,
                previous_stock=Decimal("3"),
                new_stock=Decimal("-2"),
            )

    def test_records_are_immutable(self):
        record = _record()
        with pytest.raises(FrozenInstanceError):
            record.new_stock = Decimal("0")


class TestReasonAndOperation:

    def test_all_reason_codes_parse(self):
        codes = [
            "purchase", "sale", "spoilage", "manual_adjustment", "inventory_count",
            "return", "damage", "theft", "expired", "restock",
        ]
        assert [AdjustmentReason.parse(c).value for c in codes] == codes

    def test_free_text_reason_rejected(self):
        with pytest.raises(ValidationError, match="Invalid reason"):
            AdjustmentReason.parse("dropped_on_floor")

    def test_operation_parse_is_case_insensitive(self):
        assert Operation.parse(" Remove ") is Operation.REMOVE

    def test_unknown_operation_rejected(self):
        with pytest.raises(ValidationError, match="'add' or 'remove'"):
            Operation.parse("set")


class TestNotes:

    def test_notes_trimmed(self):
        assert bounded_notes("  late delivery ") == "late delivery"
        assert bounded_notes(None) == ""

    def test_overlong_notes_rejected(self):
        with pytest.raises(ValidationError, match="at most 10 characters"):
            bounded_notes("x" * 11, max_length=10)
