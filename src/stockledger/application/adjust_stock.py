"""Application service: Adjust Stock use case."""

from __future__ import annotations

from stockledger.application.dto import StockItemDTO, item_dto
from stockledger.domain.service.adjustment_processor import AdjustmentProcessor


class AdjustStockHandler:

    def __init__(self, processor: AdjustmentProcessor) -> None:
        self._processor = processor

    def handle(
        self,
        item_id: str,
        operation: str,
        quantity: object,
        reason: str,
        notes: str | None,
        actor_id: str,
    ) -> StockItemDTO:
        """Add or remove stock; raw strings are validated by the processor."""
        view = self._processor.adjust(
            item_id=item_id,
            operation=operation,
            quantity=quantity,
            reason=reason,
            notes=notes,
            actor_id=actor_id,
        )
        return item_dto(view)
