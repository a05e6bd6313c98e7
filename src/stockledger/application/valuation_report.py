"""Application service: Valuation Report use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from stockledger.domain.model.stock_item import ItemFilter, ItemKind
from stockledger.domain.model.value_objects import Money
from stockledger.domain.repository.stock_catalog import StockCatalog
from stockledger.domain.service.valuation import catalog_value


@dataclass(frozen=True)
class ValuationDTO:
    item_count: int
    products: Money
    ingredients: Money
    total: Money


class ValuationHandler:

    def __init__(self, catalog: StockCatalog) -> None:
        self._catalog = catalog

    def handle(self) -> ValuationDTO:
        items = self._catalog.list(ItemFilter(active=True))
        products = catalog_value(i for i in items if i.kind is ItemKind.PRODUCT)
        ingredients = catalog_value(i for i in items if i.kind is ItemKind.INGREDIENT)
        return ValuationDTO(
            item_count=len(items),
            products=products,
            ingredients=ingredients,
            total=products + ingredients,
        )
