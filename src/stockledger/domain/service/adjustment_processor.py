"""Domain service: Adjustment Processor.

The only legal way to change an item's on-hand quantity. Each adjustment
is one unit of work against two repositories: the catalog quantity write
and the ledger append either both happen or neither does.

Flow per request:
  1. resolve the item (must exist and be active)
  2. validate quantity, operation, reason, notes and actor
  3. take the item's lock and re-read the item under it
  4. compute the new quantity
  5. refuse removals that would go below zero
  6. write the catalog, append the ledger, roll the catalog back if the
     append fails
  7. return the refreshed item with status and value attached

Lock timeouts and stale version stamps are retried with exponential
backoff up to ``max_retries`` times before surfacing as
ConcurrencyConflictError. Nothing else is retried.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

import structlog

from stockledger.domain.exceptions import (
    ConcurrencyConflictError,
    InsufficientStockError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from stockledger.domain.model.adjustment import (
    NOTES_MAX_LENGTH,
    AdjustmentReason,
    AdjustmentRecord,
    Operation,
    bounded_notes,
)
from stockledger.domain.model.stock_item import StockItem
from stockledger.domain.model.value_objects import Quantity
from stockledger.domain.repository.adjustment_ledger import AdjustmentLedger
from stockledger.domain.repository.stock_catalog import StockCatalog
from stockledger.domain.service.item_locks import ItemLockRegistry
from stockledger.domain.service.item_view import StockItemView, view_of

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AdjustmentProcessor:

    def __init__(
        self,
        catalog: StockCatalog,
        ledger: AdjustmentLedger,
        locks: ItemLockRegistry | None = None,
        *,
        lock_timeout: float = 2.0,
        max_retries: int = 3,
        retry_backoff: float = 0.05,
        notes_max_length: int = NOTES_MAX_LENGTH,
        default_min_stock: Decimal | None = None,
        clock: Callable[[], datetime] = _utc_now,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._locks = locks or ItemLockRegistry()
        self._lock_timeout = lock_timeout
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff
        self._notes_max_length = notes_max_length
        self._default_min_stock = default_min_stock
        self._clock = clock
        self._sleep = sleep

    def adjust(
        self,
        item_id: str,
        operation: Operation | str,
        quantity: object,
        reason: AdjustmentReason | str,
        notes: str | None,
        actor_id: str,
    ) -> StockItemView:
        """Apply one add/remove adjustment and return the refreshed item."""
        item = self._resolve(item_id)
        qty = Quantity.of(quantity)
        op = Operation.parse(operation)
        why = AdjustmentReason.parse(reason)
        text = bounded_notes(notes, self._notes_max_length)
        if not actor_id or not str(actor_id).strip():
            raise ValidationError("actor_id is required")

        attempt = 0
        while True:
            try:
                return self._apply_once(item.id, op, qty.value, why, text, str(actor_id))
            except ConcurrencyConflictError as exc:
                if attempt >= self._max_retries:
                    logger.warning(
                        "Adjustment abandoned after retries",
                        item_id=item.id,
                        attempts=attempt + 1,
                        error=str(exc),
                    )
                    raise ConcurrencyConflictError(
                        f"Could not adjust '{item.name}' after {attempt + 1} attempts: {exc}"
                    ) from exc
                delay = self._retry_backoff * (2 ** attempt)
                logger.warning(
                    "Adjustment conflict, retrying",
                    item_id=item.id,
                    attempt=attempt + 1,
                    delay=delay,
                )
                self._sleep(delay)
                attempt += 1

    # --- Internal helpers -----------------------------------------------------

    def _resolve(self, item_id: str) -> StockItem:
        item = self._catalog.get(item_id)
        if item is None:
            raise NotFoundError(f"Stock item '{item_id}' not found")
        if not item.is_active:
            raise NotFoundError(f"Stock item '{item.name}' is inactive")
        return item

    def _apply_once(
        self,
        item_id: str,
        op: Operation,
        quantity: Decimal,
        reason: AdjustmentReason,
        notes: str,
        actor_id: str,
    ) -> StockItemView:
        with self._locks.hold(item_id, self._lock_timeout):
            # Re-read under the lock: the pre-lock read may be stale.
            item = self._resolve(item_id)
            current = item.current_stock
            new_stock = op.apply(current, quantity)

            if new_stock < 0:
                logger.warning(
                    "Removal rejected",
                    item_id=item.id,
                    requested=str(quantity),
                    on_hand=str(current),
                )
                raise InsufficientStockError(item.name, quantity, current)

            now = self._clock()
            record = AdjustmentRecord(
                item_id=item.id,
                operation=op,
                quantity=quantity,
                reason=reason,
                previous_stock=current,
                new_stock=new_stock,
                actor_id=actor_id,
                notes=notes,
                created_at=now,
            )
            restocked_at = now if op is Operation.ADD else item.last_restocked_at

            updated = self._catalog.set_quantity(
                item.id,
                new_stock,
                expected_version=item.version,
                last_restocked_at=restocked_at,
            )
            try:
                self._ledger.append(record)
            except Exception as exc:
                self._roll_back(item, updated, exc)
                if isinstance(exc, PersistenceError):
                    raise
                raise PersistenceError(f"Ledger append failed: {exc}") from exc

            logger.info(
                "Stock adjusted",
                item_id=item.id,
                operation=op.value,
                quantity=str(quantity),
                reason=reason.value,
                previous_stock=str(current),
                new_stock=str(new_stock),
                actor_id=actor_id,
                record_id=record.id,
            )

        view = view_of(updated, self._default_min_stock)
        if view.status.needs_restock:
            logger.warning(
                "Stock below minimum",
                item_id=item.id,
                name=item.name,
                status=view.status.value,
                current_stock=str(new_stock),
            )
        return view

    def _roll_back(self, before: StockItem, after: StockItem, cause: Exception) -> None:
        """Restore the catalog write after a failed ledger append."""
        logger.error(
            "Ledger append failed, rolling back catalog write",
            item_id=before.id,
            error=str(cause),
        )
        try:
            self._catalog.set_quantity(
                before.id,
                before.current_stock,
                expected_version=after.version,
                last_restocked_at=before.last_restocked_at,
            )
        except Exception as rollback_exc:
            logger.critical(
                "Catalog rollback failed; catalog and ledger diverge",
                item_id=before.id,
                error=str(rollback_exc),
            )
            raise PersistenceError(
                f"Rollback of item {before.id} failed after ledger error ({cause}): "
                f"{rollback_exc}"
            ) from rollback_exc
