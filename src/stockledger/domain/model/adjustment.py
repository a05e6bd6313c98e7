"""AdjustmentRecord: one immutable entry in the stock ledger.

A record is created exactly once per successfully applied adjustment
and is never updated or deleted afterwards.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from stockledger.domain.exceptions import ValidationError


class Operation(Enum):
    ADD = "add"
    REMOVE = "remove"

    @staticmethod
    def parse(raw: str | Operation) -> Operation:
        if isinstance(raw, Operation):
            return raw
        try:
            return Operation(str(raw).strip().lower())
        except ValueError:
            raise ValidationError("Operation must be 'add' or 'remove'")

    def apply(self, current: Decimal, quantity: Decimal) -> Decimal:
        if self is Operation.ADD:
            return current + quantity
        return current - quantity


class AdjustmentReason(Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    SPOILAGE = "spoilage"
    MANUAL_ADJUSTMENT = "manual_adjustment"
    INVENTORY_COUNT = "inventory_count"
    RETURN = "return"
    DAMAGE = "damage"
    THEFT = "theft"
    EXPIRED = "expired"
    RESTOCK = "restock"

    @staticmethod
    def parse(raw: str | AdjustmentReason) -> AdjustmentReason:
        """Accept only the closed set of reason codes; free text goes in notes."""
        if isinstance(raw, AdjustmentReason):
            return raw
        try:
            return AdjustmentReason(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(r.value for r in AdjustmentReason)
            raise ValidationError(f"Invalid reason {raw!r} (expected one of: {allowed})")


NOTES_MAX_LENGTH = 500


def bounded_notes(raw: str | None, max_length: int = NOTES_MAX_LENGTH) -> str:
    notes = (raw or "").strip()
    if len(notes) > max_length:
        raise ValidationError(
            f"Notes must be at most {max_length} characters, got {len(notes)}"
        )
    return notes


@dataclass(frozen=True)
class AdjustmentRecord:
    """Audit trail entry.

    ``new_stock`` must equal ``previous_stock`` plus (add) or minus (remove)
    ``quantity``; the constructor refuses anything else so a corrupted
    record can never be built, whether fresh or reloaded from storage.
    """

    item_id: str
    operation: Operation
    quantity: Decimal
    reason: AdjustmentReason
    previous_stock: Decimal
    new_stock: Decimal
    actor_id: str
    notes: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationError("Adjustment quantity must be positive")
        if self.new_stock != self.operation.apply(self.previous_stock, self.quantity):
            raise ValidationError(
                f"Inconsistent adjustment: {self.previous_stock} {self.operation.value} "
                f"{self.quantity} != {self.new_stock}"
            )
        if self.new_stock < 0:
            raise ValidationError("Adjustment cannot leave negative stock")

    @property
    def delta(self) -> Decimal:
        return self.new_stock - self.previous_stock
