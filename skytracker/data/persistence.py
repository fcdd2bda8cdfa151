"""
Persistence gateway — the only code that touches durable storage.

State lives in a directory of JSON documents, one per key, mirroring the
browser's localStorage layout: ``skylanders`` (catalog array),
``userInventory`` (records keyed by id), ``savedShareViews`` and
``schemaVersion``. Every save writes a full snapshot.
"""
from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from skytracker.config import (
    CATALOG_KEY, INVENTORY_KEY, SHARE_VIEWS_KEY, SCHEMA_VERSION_KEY, SCHEMA_VERSION,
)
from skytracker.data.schemas import CatalogItem, InventoryRecord, SavedShareView, default_record
from skytracker.errors import PersistenceWriteError
from skytracker.log import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Key/value storage medium
# ---------------------------------------------------------------------------

class LocalStorage:
    """String key/value store backed by one file per key."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        safe = "".join(ch if ch.isalnum() or ch in "._-" else "_" for ch in key)
        return self.directory / f"{safe}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Write atomically: temp file in the same directory, then replace."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))

    def clear(self) -> None:
        for p in self.directory.glob("*.json"):
            p.unlink(missing_ok=True)


# ---------------------------------------------------------------------------
# Stored state + migrations
# ---------------------------------------------------------------------------

@dataclass
class StoredState:
    catalog: list[CatalogItem] = field(default_factory=list)
    inventory: dict[str, InventoryRecord] = field(default_factory=dict)
    version: int = SCHEMA_VERSION


def _migrate_v0(raw_catalog: list, raw_inventory: dict) -> tuple[list, dict]:
    """Untagged legacy state: fill every record's missing fields with defaults."""
    defaults = default_record().to_dict()
    inventory = {}
    for item_id, rec in raw_inventory.items():
        merged = dict(defaults)
        if isinstance(rec, dict):
            merged.update({k: v for k, v in rec.items() if v is not None})
        inventory[str(item_id)] = merged
    return raw_catalog, inventory


# from-version -> migration to from-version + 1
MIGRATIONS: dict[int, Callable[[list, dict], tuple[list, dict]]] = {
    0: _migrate_v0,
}


def migrate(raw_catalog: list, raw_inventory: dict, version: int) -> tuple[list, dict]:
    """Apply migrations in order until the state reaches SCHEMA_VERSION."""
    while version < SCHEMA_VERSION:
        step = MIGRATIONS.get(version)
        if step is None:
            raise ValueError(f"No migration from schema version {version}")
        raw_catalog, raw_inventory = step(raw_catalog, raw_inventory)
        version += 1
    return raw_catalog, raw_inventory


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------

class PersistenceGateway:
    """Reads state once at startup and mirrors every mutation back to storage."""

    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage

    def _read_json(self, key: str):
        """Parsed document for key, or None if absent or unreadable."""
        try:
            text = self.storage.get_item(key)
        except OSError as e:
            logger.error("Failed to read '%s' from local storage: %s", key, e)
            return None
        if text is None:
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            logger.error("Stored '%s' is not valid JSON; ignoring it: %s", key, e)
            return None

    def _write_json(self, key: str, data) -> None:
        try:
            text = json.dumps(data, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise PersistenceWriteError(f"Could not serialize '{key}': {e}") from e
        try:
            self.storage.set_item(key, text)
        except OSError as e:
            raise PersistenceWriteError(f"Could not write '{key}' to local storage: {e}") from e

    # ------------------------------------------------------------------
    # Catalog + inventory
    # ------------------------------------------------------------------

    def load(self) -> StoredState | None:
        """Return stored state, or None when nothing has been saved yet."""
        raw_catalog = self._read_json(CATALOG_KEY)
        raw_inventory = self._read_json(INVENTORY_KEY)
        if raw_catalog is None and raw_inventory is None:
            return None

        if not isinstance(raw_catalog, list):
            raw_catalog = []
        if not isinstance(raw_inventory, dict):
            raw_inventory = {}

        version = self._read_json(SCHEMA_VERSION_KEY)
        if not isinstance(version, int):
            version = 0
        if version > SCHEMA_VERSION:
            logger.warning(
                "Stored schema version %s is newer than supported version %s; loading as-is.",
                version, SCHEMA_VERSION,
            )
        else:
            raw_catalog, raw_inventory = migrate(raw_catalog, raw_inventory, version)

        catalog = []
        for entry in raw_catalog:
            if isinstance(entry, dict) and entry.get("id") is not None:
                catalog.append(CatalogItem.from_dict(entry))
            else:
                logger.warning("Skipping malformed stored catalog entry: %r", entry)

        inventory = {
            str(item_id): InventoryRecord.from_dict(rec)
            for item_id, rec in raw_inventory.items()
            if isinstance(rec, dict)
        }
        return StoredState(catalog=catalog, inventory=inventory, version=SCHEMA_VERSION)

    def save(self, catalog: list[CatalogItem], inventory: dict[str, InventoryRecord]) -> None:
        """Write a full snapshot. Raises PersistenceWriteError on any failure.

        Inventory is written before the catalog. Records are never removed by
        a catalog change, so a failure part-way leaves the old catalog next to
        a superset of its records, which loads cleanly.
        """
        self._write_json(INVENTORY_KEY, {item_id: rec.to_dict() for item_id, rec in inventory.items()})
        self._write_json(CATALOG_KEY, [item.to_dict() for item in catalog])
        self._write_json(SCHEMA_VERSION_KEY, SCHEMA_VERSION)

    # ------------------------------------------------------------------
    # Saved share views
    # ------------------------------------------------------------------

    def load_views(self) -> list[SavedShareView]:
        raw = self._read_json(SHARE_VIEWS_KEY)
        if not isinstance(raw, list):
            return []
        views = []
        for entry in raw:
            if isinstance(entry, dict) and entry.get("id") is not None:
                views.append(SavedShareView.from_dict(entry))
        return views

    def save_views(self, views: list[SavedShareView]) -> None:
        self._write_json(SHARE_VIEWS_KEY, [v.to_dict() for v in views])

    def clear(self) -> None:
        self.storage.clear()
