"""JSON-file-backed implementation of StockCatalog.

One file per item under ``<root>/items``. Writes go to a temporary file
that is then ``os.replace``d over the old one, so readers never see a
half-written item and writes to different items never share a file.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockledger.domain.exceptions import (
    ConcurrencyConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from stockledger.domain.model.stock_item import ItemFilter, ItemKind, StockItem
from stockledger.domain.model.value_objects import Money
from stockledger.domain.repository.stock_catalog import StockCatalog, catalog_order


class JsonStockCatalog(StockCatalog):

    def __init__(self, root: Path) -> None:
        self._dir = root / "items"
        # Guards name uniqueness across creates/renames only.
        self._naming_lock = threading.Lock()
        self._ensure_dir()

    # --- StockCatalog interface -----------------------------------------------

    def get(self, item_id: str) -> StockItem | None:
        if not _valid_id(item_id):
            return None
        path = self._path_for(item_id)
        if not path.exists():
            return None
        return self._to_domain(self._load_raw(path))

    def list(self, item_filter: ItemFilter | None = None) -> list[StockItem]:
        item_filter = item_filter or ItemFilter(active=None)
        items = [
            self._to_domain(self._load_raw(path))
            for path in self._dir.glob("*.json")
        ]
        return sorted((i for i in items if item_filter.matches(i)), key=catalog_order)

    def create(self, item: StockItem) -> StockItem:
        with self._naming_lock:
            self._assert_name_free(item)
            if self._path_for(item.id).exists():
                raise ValidationError(f"Stock item '{item.id}' already exists")
            item.version = 1
            self._persist_raw(self._path_for(item.id), self._to_raw(item))
        return item

    def update(self, item: StockItem) -> StockItem:
        with self._naming_lock:
            stored = self._require(item.id)
            if stored.version != item.version:
                raise ConcurrencyConflictError(
                    f"Item {item.id} changed concurrently "
                    f"(expected version {item.version}, found {stored.version})"
                )
            self._assert_name_free(item)
            item.current_stock = stored.current_stock
            item.last_restocked_at = stored.last_restocked_at
            item.version = stored.version + 1
            self._persist_raw(self._path_for(item.id), self._to_raw(item))
        return item

    def discard(self, item_id: str) -> None:
        with self._naming_lock:
            stored = self._require(item_id)
            if stored.current_stock != 0:
                raise ValidationError(
                    f"Cannot discard '{stored.name}' with {stored.current_stock} on hand"
                )
            try:
                self._path_for(item_id).unlink()
            except OSError as exc:
                raise PersistenceError(f"Failed to remove {item_id}.json: {exc}") from exc

    def set_quantity(
        self,
        item_id: str,
        new_value: Decimal,
        *,
        expected_version: int,
        last_restocked_at: datetime | None,
    ) -> StockItem:
        if new_value < 0:
            raise ValidationError(f"Stock cannot be negative, got {new_value}")
        stored = self._require(item_id)
        if stored.version != expected_version:
            raise ConcurrencyConflictError(
                f"Item {item_id} changed concurrently "
                f"(expected version {expected_version}, found {stored.version})"
            )
        stored.current_stock = new_value
        stored.last_restocked_at = last_restocked_at
        stored.version += 1
        self._persist_raw(self._path_for(item_id), self._to_raw(stored))
        return stored

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: StockItem) -> dict:
        return {
            "id": item.id,
            "kind": item.kind.value,
            "name": item.name,
            "unit": item.unit,
            "current_stock": str(item.current_stock),
            "min_stock": None if item.min_stock is None else str(item.min_stock),
            "max_stock": None if item.max_stock is None else str(item.max_stock),
            "unit_cost": str(item.unit_cost.amount),
            "currency": item.unit_cost.currency,
            "last_restocked_at": (
                item.last_restocked_at.isoformat() if item.last_restocked_at else None
            ),
            "is_active": item.is_active,
            "description": item.description,
            "supplier": item.supplier,
            "created_at": item.created_at.isoformat(),
            "version": item.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockItem:
        try:
            return StockItem(
                id=raw["id"],
                kind=ItemKind(raw["kind"]),
                name=raw["name"],
                unit=raw["unit"],
                current_stock=Decimal(raw["current_stock"]),
                min_stock=None if raw.get("min_stock") is None else Decimal(raw["min_stock"]),
                max_stock=None if raw.get("max_stock") is None else Decimal(raw["max_stock"]),
                unit_cost=Money(Decimal(raw["unit_cost"]), raw.get("currency", "USD")),
                last_restocked_at=(
                    datetime.fromisoformat(raw["last_restocked_at"])
                    if raw.get("last_restocked_at")
                    else None
                ),
                is_active=raw.get("is_active", True),
                description=raw.get("description", ""),
                supplier=raw.get("supplier", ""),
                created_at=datetime.fromisoformat(raw["created_at"]),
                version=raw["version"],
            )
        except (KeyError, ValueError, ArithmeticError, ValidationError) as exc:
            raise PersistenceError(f"Corrupt stock item record: {exc}") from exc

    # --- File helpers ---------------------------------------------------------

    def _path_for(self, item_id: str) -> Path:
        if not _valid_id(item_id):
            raise NotFoundError(f"Stock item '{item_id}' not found")
        return self._dir / f"{item_id}.json"

    def _require(self, item_id: str) -> StockItem:
        item = self.get(item_id)
        if item is None:
            raise NotFoundError(f"Stock item '{item_id}' not found")
        return item

    def _assert_name_free(self, item: StockItem) -> None:
        for other in self.list(ItemFilter(kind=item.kind, active=None)):
            if other.id != item.id and other.name.lower() == item.name.lower():
                raise ValidationError(
                    f"A {item.kind.value} named '{item.name}' already exists"
                )

    @staticmethod
    def _load_raw(path: Path) -> dict:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Failed to read {path.name}: {exc}") from exc

    def _persist_raw(self, path: Path, raw: dict) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=".", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(raw, indent=2) + "\n")
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Failed to write {path.name}: {exc}") from exc

    def _ensure_dir(self) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)


def _valid_id(item_id: str) -> bool:
    return bool(item_id) and not any(c in item_id for c in "/\\") and not item_id.startswith(".")
