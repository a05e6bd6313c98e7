"""StockItem aggregate: on-hand quantity and thresholds for one product or ingredient.

Quantity is changed only by the AdjustmentProcessor, which goes through
``StockCatalog.set_quantity``. Everything else on the item (name, unit,
thresholds, cost) is catalogue detail and may be edited freely.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.value_objects import Money, stock_level


class ItemKind(Enum):
    PRODUCT = "product"
    INGREDIENT = "ingredient"

    @staticmethod
    def parse(raw: str | ItemKind) -> ItemKind:
        if isinstance(raw, ItemKind):
            return raw
        try:
            return ItemKind(str(raw).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown item kind {raw!r} (expected 'product' or 'ingredient')"
            )


DEFAULT_UNIT = "pcs"


@dataclass
class StockItem:
    """Aggregate root for stock tracking.

    Invariants:
    - ``current_stock`` is never negative
    - ``min_stock <= max_stock`` whenever both are set
    - items are deactivated, never deleted

    ``min_stock = None`` means the configured default threshold applies.
    ``version`` is bumped by the catalog on every write.
    """

    id: str
    kind: ItemKind
    name: str
    unit: str = DEFAULT_UNIT
    current_stock: Decimal = Decimal("0")
    min_stock: Decimal | None = None
    max_stock: Decimal | None = None
    unit_cost: Money = field(default_factory=Money.zero)
    last_restocked_at: datetime | None = None
    is_active: bool = True
    description: str = ""
    supplier: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory (used for NEW items only) ------------------------------------

    @staticmethod
    def create(
        kind: ItemKind | str,
        name: str,
        unit: str = DEFAULT_UNIT,
        min_stock: object = None,
        max_stock: object = None,
        unit_cost: Money | None = None,
        description: str = "",
        supplier: str = "",
    ) -> StockItem:
        """Create a new item with zero stock, enforcing all invariants.

        Any opening quantity is booked afterwards as a ledger adjustment.
        """
        item = StockItem(
            id=str(uuid.uuid4()),
            kind=ItemKind.parse(kind),
            name=_required_text(name, "Item name"),
            unit=_required_text(unit, "Unit of measure"),
            min_stock=_optional_level(min_stock, "min_stock"),
            max_stock=_optional_level(max_stock, "max_stock"),
            unit_cost=unit_cost or Money.zero(),
            description=(description or "").strip(),
            supplier=(supplier or "").strip(),
        )
        item._check_thresholds()
        return item

    # --- Mutations ------------------------------------------------------------

    def update_details(
        self,
        name: str | None = None,
        unit: str | None = None,
        min_stock: object = None,
        max_stock: object = None,
        unit_cost: Money | None = None,
        description: str | None = None,
        supplier: str | None = None,
    ) -> None:
        """Edit catalogue details. ``None`` leaves a field unchanged.

        An empty string clears a threshold, so ``min_stock=""`` falls back
        to the configured default.
        """
        if name is not None:
            self.name = _required_text(name, "Item name")
        if unit is not None:
            self.unit = _required_text(unit, "Unit of measure")
        if min_stock is not None:
            self.min_stock = _optional_level(min_stock, "min_stock")
        if max_stock is not None:
            self.max_stock = _optional_level(max_stock, "max_stock")
        if unit_cost is not None:
            self.unit_cost = unit_cost
        if description is not None:
            self.description = description.strip()
        if supplier is not None:
            self.supplier = supplier.strip()
        self._check_thresholds()

    def deactivate(self) -> None:
        if not self.is_active:
            raise ValidationError(f"Item '{self.name}' is already inactive")
        self.is_active = False

    # --- Internal helpers -----------------------------------------------------

    def _check_thresholds(self) -> None:
        if (
            self.min_stock is not None
            and self.max_stock is not None
            and self.min_stock > self.max_stock
        ):
            raise ValidationError(
                f"min_stock ({self.min_stock}) cannot exceed max_stock ({self.max_stock})"
            )


@dataclass(frozen=True)
class ItemFilter:
    """Catalog listing filter. ``None`` means "don't filter on this"."""

    kind: ItemKind | None = None
    active: bool | None = True

    def matches(self, item: StockItem) -> bool:
        if self.kind is not None and item.kind is not self.kind:
            return False
        if self.active is not None and item.is_active != self.active:
            return False
        return True


def _required_text(raw: str | None, label: str) -> str:
    if raw is None or not str(raw).strip():
        raise ValidationError(f"{label} is required")
    return str(raw).strip()


def _optional_level(raw: object, field_name: str) -> Decimal | None:
    if raw is None or raw == "":
        return None
    return stock_level(raw, field_name)
