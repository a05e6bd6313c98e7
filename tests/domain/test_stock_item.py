"""Unit tests for the StockItem aggregate."""

from decimal import Decimal

import pytest

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.stock_item import ItemFilter, ItemKind, StockItem
from stockledger.domain.model.value_objects import Money


class TestStockItemCreate:

    def test_new_item_starts_empty_and_active(self):
        item = StockItem.create(kind="ingredient", name="  Flour ", unit="kg", min_stock="5")
        assert item.kind is ItemKind.INGREDIENT
        assert item.name == "Flour"
        assert item.current_stock == Decimal("0")
        assert item.min_stock == Decimal("5")
        assert item.is_active

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError, match="Unknown item kind"):
            StockItem.create(kind="beverage", name="Cola")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Item name is required"):
            StockItem.create(kind="product", name="   ")

    def test_min_above_max_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed max_stock"):
            StockItem.create(kind="product", name="Burger", min_stock=50, max_stock=10)

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            StockItem.create(kind="product", name="Burger", min_stock=-1)

    def test_blank_thresholds_mean_default(self):
        item = StockItem.create(kind="product", name="Burger", min_stock="", max_stock=None)
        assert item.min_stock is None
        assert item.max_stock is None


class TestStockItemUpdate:

    def test_update_details_leaves_unset_fields(self):
        item = StockItem.create(kind="product", name="Burger", min_stock=5, max_stock=50)
        item.update_details(unit_cost=Money.of("3.20"), supplier="Acme")
        assert item.name == "Burger"
        assert item.min_stock == Decimal("5")
        assert item.unit_cost == Money.of("3.20")
        assert item.supplier == "Acme"

    def test_update_cannot_break_threshold_order(self):
        item = StockItem.create(kind="product", name="Burger", min_stock=5, max_stock=50)
        with pytest.raises(ValidationError, match="cannot exceed"):
            item.update_details(min_stock=60)

    def test_empty_string_clears_thresholds(self):
        item = StockItem.create(kind="product", name="Burger", min_stock=5, max_stock=50)
        item.update_details(min_stock="")
        assert item.min_stock is None
        assert item.max_stock == Decimal("50")
        item.update_details(max_stock="")
        assert item.max_stock is None

    def test_deactivate_twice_rejected(self):
        item = StockItem.create(kind="product", name="Burger")
        item.deactivate()
        assert not item.is_active
        with pytest.raises(ValidationError, match="already inactive"):
            item.deactivate()


class TestItemFilter:

    def test_default_filter_hides_inactive(self):
        item = StockItem.create(kind="product", name="Burger")
        item.deactivate()
        assert not ItemFilter().matches(item)
        assert ItemFilter(active=None).matches(item)

    def test_kind_filter(self):
        item = StockItem.create(kind="ingredient", name="Salt")
        assert ItemFilter(kind=ItemKind.INGREDIENT).matches(item)
        assert not ItemFilter(kind=ItemKind.PRODUCT).matches(item)
