"""JSON-lines-backed implementation of AdjustmentLedger.

One append-only file per item under ``<root>/ledger``; each line is one
record. A line without its trailing newline is an append still in flight
(or a failed one): readers ignore it, and the next append cuts it off
before writing.
"""

from __future__ import annotations

import json
import os
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockledger.domain.exceptions import PersistenceError, ValidationError
from stockledger.domain.model.adjustment import (
    AdjustmentReason,
    AdjustmentRecord,
    Operation,
)
from stockledger.domain.repository.adjustment_ledger import AdjustmentLedger


class JsonAdjustmentLedger(AdjustmentLedger):

    def __init__(self, root: Path) -> None:
        self._dir = root / "ledger"
        self._ensure_dir()

    # --- AdjustmentLedger interface -------------------------------------------

    def append(self, record: AdjustmentRecord) -> None:
        path = self._path_for(record.item_id)
        data = (json.dumps(self._to_raw(record)) + "\n").encode("utf-8")
        try:
            self._drop_torn_tail(path)
            with path.open("ab", buffering=0) as fh:
                start = fh.seek(0, os.SEEK_END)
                try:
                    written = fh.write(data)
                    if written != len(data):
                        raise OSError(f"short write ({written} of {len(data)} bytes)")
                    os.fsync(fh.fileno())
                except OSError:
                    fh.truncate(start)
                    raise
        except OSError as exc:
            raise PersistenceError(
                f"Failed to append adjustment for item {record.item_id}: {exc}"
            ) from exc

    def history(self, item_id: str) -> list[AdjustmentRecord]:
        path = self._path_for(item_id)
        if not path.exists():
            return []
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Failed to read ledger for item {item_id}: {exc}") from exc

        complete, _, _torn = text.rpartition("\n")
        records = [
            self._parse_line(line)
            for line in complete.split("\n")
            if line.strip()
        ]
        # Stable: records sharing a timestamp keep their append order.
        return sorted(records, key=lambda r: r.created_at)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: AdjustmentRecord) -> dict:
        return {
            "id": record.id,
            "item_id": record.item_id,
            "operation": record.operation.value,
            "quantity": str(record.quantity),
            "reason": record.reason.value,
            "notes": record.notes,
            "previous_stock": str(record.previous_stock),
            "new_stock": str(record.new_stock),
            "actor_id": record.actor_id,
            "created_at": record.created_at.isoformat(),
        }

    def _parse_line(self, line: str) -> AdjustmentRecord:
        try:
            raw = json.loads(line)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupt ledger line: {exc}") from exc
        return self._to_domain(raw)

    @staticmethod
    def _to_domain(raw: dict) -> AdjustmentRecord:
        try:
            return AdjustmentRecord(
                id=raw["id"],
                item_id=raw["item_id"],
                operation=Operation(raw["operation"]),
                quantity=Decimal(raw["quantity"]),
                reason=AdjustmentReason(raw["reason"]),
                notes=raw.get("notes", ""),
                previous_stock=Decimal(raw["previous_stock"]),
                new_stock=Decimal(raw["new_stock"]),
                actor_id=raw["actor_id"],
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
        except (KeyError, ValueError, ArithmeticError, ValidationError) as exc:
            raise PersistenceError(f"Corrupt ledger record: {exc}") from exc

    # --- File helpers ---------------------------------------------------------

    def _path_for(self, item_id: str) -> Path:
        if not item_id or "/" in item_id or "\\" in item_id or item_id.startswith("."):
            raise PersistenceError(f"Invalid item id for ledger: {item_id!r}")
        return self._dir / f"{item_id}.jsonl"

    @staticmethod
    def _drop_torn_tail(path: Path) -> None:
        """Cut a trailing partial line so the next record starts on its own line."""
        if not path.exists():
            return
        with path.open("r+b") as fh:
            size = fh.seek(0, os.SEEK_END)
            if size == 0:
                return
            fh.seek(size - 1)
            if fh.read(1) == b"\n":
                return
            fh.seek(0)
            content = fh.read()
            fh.truncate(content.rfind(b"\n") + 1)

    def _ensure_dir(self) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
