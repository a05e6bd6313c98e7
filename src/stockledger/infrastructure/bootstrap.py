"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stockledger.config import Settings
from stockledger.domain.service.adjustment_processor import AdjustmentProcessor
from stockledger.domain.service.item_locks import ItemLockRegistry
from stockledger.infrastructure.persistence.json_adjustment_ledger import (
    JsonAdjustmentLedger,
)
from stockledger.infrastructure.persistence.json_stock_catalog import JsonStockCatalog

# One registry per process: adjustments and detail edits serialize on the same locks.
_ITEM_LOCKS = ItemLockRegistry()


def settings() -> Settings:
    return Settings.from_env()


def item_locks() -> ItemLockRegistry:
    return _ITEM_LOCKS


def stock_catalog(config: Settings) -> JsonStockCatalog:
    return JsonStockCatalog(config.data_dir)


def adjustment_ledger(config: Settings) -> JsonAdjustmentLedger:
    return JsonAdjustmentLedger(config.data_dir)


def adjustment_processor(config: Settings) -> AdjustmentProcessor:
    return AdjustmentProcessor(
        catalog=stock_catalog(config),
        ledger=adjustment_ledger(config),
        locks=item_locks(),
        lock_timeout=config.lock_timeout,
        max_retries=config.max_retries,
        retry_backoff=config.retry_backoff,
        notes_max_length=config.notes_max_length,
        default_min_stock=config.default_min_stock,
    )
