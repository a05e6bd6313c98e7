"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from stockledger.domain.model.adjustment import AdjustmentRecord
from stockledger.domain.model.value_objects import Money
from stockledger.domain.service.item_view import StockItemView


@dataclass(frozen=True)
class StockItemDTO:
    """Output: an item with its derived status and value."""

    id: str
    kind: str
    name: str
    unit: str
    current_stock: Decimal
    min_stock: Decimal | None
    max_stock: Decimal | None
    unit_cost: Money
    total_value: Money
    status: str
    is_active: bool
    last_restocked_at: datetime | None
    supplier: str
    description: str


@dataclass(frozen=True)
class AdjustmentDTO:
    id: str
    operation: str
    quantity: Decimal
    reason: str
    notes: str
    previous_stock: Decimal
    new_stock: Decimal
    actor_id: str
    created_at: datetime


@dataclass(frozen=True)
class HistoryPageDTO:
    item_id: str
    item_name: str
    page: int
    size: int
    total: int
    records: list[AdjustmentDTO]

    @property
    def has_more(self) -> bool:
        return self.page * self.size < self.total


def item_dto(view: StockItemView) -> StockItemDTO:
    item = view.item
    return StockItemDTO(
        id=item.id,
        kind=item.kind.value,
        name=item.name,
        unit=item.unit,
        current_stock=item.current_stock,
        min_stock=item.min_stock,
        max_stock=item.max_stock,
        unit_cost=item.unit_cost,
        total_value=view.total_value,
        status=view.status.value,
        is_active=item.is_active,
        last_restocked_at=item.last_restocked_at,
        supplier=item.supplier,
        description=item.description,
    )


def adjustment_dto(record: AdjustmentRecord) -> AdjustmentDTO:
    return AdjustmentDTO(
        id=record.id,
        operation=record.operation.value,
        quantity=record.quantity,
        reason=record.reason.value,
        notes=record.notes,
        previous_stock=record.previous_stock,
        new_stock=record.new_stock,
        actor_id=record.actor_id,
        created_at=record.created_at,
    )
