"""Ledger replay: rebuild an item's quantity from its adjustment history.

Used by the stock audit to prove every unit on hand is explained by the
ledger.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from stockledger.domain.model.adjustment import AdjustmentRecord
from stockledger.domain.model.stock_item import StockItem


def replay(records: Sequence[AdjustmentRecord], opening: Decimal | None = None) -> Decimal:
    """Apply records in ``created_at`` order.

    Starts from ``opening`` if given, else from the first record's
    ``previous_stock`` (zero for an empty history).
    """
    ordered = sorted(records, key=lambda r: r.created_at)
    if opening is None:
        opening = ordered[0].previous_stock if ordered else Decimal("0")
    value = opening
    for record in ordered:
        value = record.operation.apply(value, record.quantity)
    return value


@dataclass(frozen=True)
class ReplayReport:
    item_id: str
    current_stock: Decimal
    replayed_stock: Decimal
    record_count: int
    problems: list[str] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not self.problems


def audit(item: StockItem, records: Sequence[AdjustmentRecord]) -> ReplayReport:
    """Check continuity, non-negativity and the final balance of an item."""
    ordered = sorted(records, key=lambda r: r.created_at)
    problems: list[str] = []

    if ordered and ordered[0].previous_stock != 0:
        problems.append(
            f"History starts at {ordered[0].previous_stock}, not zero"
        )

    previous: AdjustmentRecord | None = None
    for record in ordered:
        if record.item_id != item.id:
            problems.append(f"Record {record.id} belongs to item {record.item_id}")
        if previous is not None and record.previous_stock != previous.new_stock:
            problems.append(
                f"Record {record.id} starts at {record.previous_stock} "
                f"but the previous record ended at {previous.new_stock}"
            )
        if record.new_stock < 0:
            problems.append(f"Record {record.id} leaves negative stock {record.new_stock}")
        previous = record

    replayed = replay(ordered, opening=Decimal("0"))
    if replayed != item.current_stock:
        problems.append(
            f"Replayed stock {replayed} does not match current stock {item.current_stock}"
        )

    return ReplayReport(
        item_id=item.id,
        current_stock=item.current_stock,
        replayed_stock=replayed,
        record_count=len(ordered),
        problems=problems,
    )
