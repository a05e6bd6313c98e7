"""Application service: Create Item use case.

New items start at zero. An opening quantity is booked through the
AdjustmentProcessor like any other delivery, so the ledger explains the
item's stock from its very first unit. If that booking fails the new item
is discarded again, so a failed create leaves nothing behind.
"""

from __future__ import annotations

from decimal import Decimal

from stockledger.application.dto import StockItemDTO, item_dto
from stockledger.domain.exceptions import DomainException, ValidationError
from stockledger.domain.model.adjustment import AdjustmentReason, Operation
from stockledger.domain.model.stock_item import DEFAULT_UNIT, StockItem
from stockledger.domain.model.value_objects import Money, stock_level
from stockledger.domain.repository.stock_catalog import StockCatalog
from stockledger.domain.service.adjustment_processor import AdjustmentProcessor
from stockledger.domain.service.item_view import view_of

OPENING_BALANCE_NOTE = "Opening balance"


class CreateItemHandler:

    def __init__(
        self,
        catalog: StockCatalog,
        processor: AdjustmentProcessor,
        default_min_stock: Decimal | None = None,
    ) -> None:
        self._catalog = catalog
        self._processor = processor
        self._default_min_stock = default_min_stock

    def handle(
        self,
        kind: str,
        name: str,
        actor_id: str,
        unit: str = DEFAULT_UNIT,
        min_stock: object = None,
        max_stock: object = None,
        unit_cost: object = 0,
        initial_stock: object = 0,
        description: str = "",
        supplier: str = "",
    ) -> StockItemDTO:
        if not actor_id or not str(actor_id).strip():
            raise ValidationError("actor_id is required")
        opening = stock_level(initial_stock, "initial_stock")
        item = StockItem.create(
            kind=kind,
            name=name,
            unit=unit,
            min_stock=min_stock,
            max_stock=max_stock,
            unit_cost=Money.of(unit_cost),
            description=description,
            supplier=supplier,
        )
        self._catalog.create(item)

        if opening > 0:
            try:
                view = self._processor.adjust(
                    item_id=item.id,
                    operation=Operation.ADD,
                    quantity=opening,
                    reason=AdjustmentReason.INVENTORY_COUNT,
                    notes=OPENING_BALANCE_NOTE,
                    actor_id=actor_id,
                )
            except DomainException:
                # The processor has already rolled the quantity back to zero.
                self._catalog.discard(item.id)
                raise
            return item_dto(view)
        return item_dto(view_of(item, self._default_min_stock))
