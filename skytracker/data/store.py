"""
InventoryStore — the single owner of the catalog, per-item inventory records
and saved share views.

Loaded once at startup. Every mutation goes through a method here and writes
a full snapshot through the persistence gateway before returning.
"""
from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

import pandas as pd

from skytracker.config import STORAGE_FOLDER
from skytracker.data.persistence import LocalStorage, PersistenceGateway
from skytracker.data.schemas import (
    CatalogItem, InventoryRecord, SavedShareView, RECORD_FIELDS,
    default_record, coerce_field_value, resolve_field,
)
from skytracker.errors import PersistenceWriteError
from skytracker.log import get_logger

logger = get_logger(__name__)

# Serialized catalog field -> attribute name
_ITEM_FIELDS = {
    "id": "id",
    "name": "name",
    "element": "element",
    "category": "category",
    "game": "game",
    "imageUrl": "image_url",
    "image_url": "image_url",
    "link": "link",
}

FRAME_COLUMNS = [
    "id", "name", "element", "category", "game", "imageUrl", "link",
    "have", "need", "forTrade", "count", "value", "currency", "notes",
]


class InventoryStore:
    """Catalog + inventory state with load/save lifecycle."""

    def __init__(self, gateway: PersistenceGateway | None = None) -> None:
        self.gateway = gateway
        self._catalog: list[CatalogItem] = []
        self._inventory: dict[str, InventoryRecord] = {}
        self._views: list[SavedShareView] = []
        self._lock = threading.RLock()
        self._loaded = False
        # last failed write per document group ("inventory", "views")
        self._save_errors: dict[str, PersistenceWriteError] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> "InventoryStore":
        """Read stored state. Missing state means an empty collection."""
        with self._lock:
            state = self.gateway.load() if self.gateway else None
            if state is None:
                self._catalog, self._inventory = [], {}
            else:
                self._catalog = list(state.catalog)
                self._inventory = dict(state.inventory)
            self._views = self.gateway.load_views() if self.gateway else []
            self._loaded = True
        logger.info(
            "Loaded %d catalog items, %d inventory records, %d saved views",
            len(self._catalog), len(self._inventory), len(self._views),
        )
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @property
    def save_error(self) -> PersistenceWriteError | None:
        """The outstanding write failure, if any document group failed its last save."""
        return next(iter(self._save_errors.values()), None)

    def _write(self, group: str, save) -> bool:
        """Run one gateway save. Failures are recorded per group, never raised."""
        if self.gateway is None:
            return True
        try:
            save()
        except PersistenceWriteError as e:
            logger.error("Failed to save %s: %s", group, e)
            self._save_errors[group] = e
            return False
        self._save_errors.pop(group, None)
        return True

    def _persist(self) -> bool:
        """Snapshot catalog + inventory."""
        return self._write("inventory", lambda: self.gateway.save(self._catalog, self._inventory))

    def _persist_views(self) -> bool:
        return self._write("views", lambda: self.gateway.save_views(self._views))

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def catalog(self) -> list[CatalogItem]:
        return list(self._catalog)

    @property
    def inventory(self) -> dict[str, InventoryRecord]:
        """Copies of every stored record; edits here do not reach the store."""
        return {item_id: rec.copy() for item_id, rec in self._inventory.items()}

    def item(self, item_id: str) -> Optional[CatalogItem]:
        return next((it for it in self._catalog if it.id == item_id), None)

    def record(self, item_id: str) -> InventoryRecord:
        """Get-or-default: the stored record, or a fresh zero-valued one (not inserted)."""
        rec = self._inventory.get(item_id)
        return rec.copy() if rec is not None else default_record()

    def has_record(self, item_id: str) -> bool:
        return item_id in self._inventory

    def item_count(self) -> int:
        return len(self._catalog)

    def elements(self) -> list[str]:
        """Distinct elements, sorted."""
        return sorted({it.element for it in self._catalog})

    def query(self, **criteria: Any) -> list[CatalogItem]:
        """Catalog items whose fields equal every given value.

        Field names may be camelCase (``imageUrl``) or snake_case. A field
        that does not exist matches nothing.
        """
        attrs = {}
        for key, value in criteria.items():
            attr = _ITEM_FIELDS.get(key)
            if attr is None:
                return []
            attrs[attr] = value
        return [
            it for it in self._catalog
            if all(getattr(it, attr) == value for attr, value in attrs.items())
        ]

    def to_frame(self) -> pd.DataFrame:
        """Catalog joined with (get-or-default) inventory records, in catalog order."""
        rows = []
        for it in self._catalog:
            row = it.to_dict()
            row.update(self.record(it.id).to_dict())
            rows.append(row)
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def import_catalog(self, items: Iterable[CatalogItem]) -> list[CatalogItem]:
        """Replace the catalog. Known ids keep their records; new ids get defaults.

        Duplicate ids keep their first occurrence.
        """
        with self._lock:
            seen: set[str] = set()
            catalog: list[CatalogItem] = []
            dropped = 0
            for it in items:
                if it.id in seen:
                    dropped += 1
                    continue
                seen.add(it.id)
                catalog.append(it)
            if dropped:
                logger.warning("Dropped %d catalog rows with duplicate ids", dropped)

            self._catalog = catalog
            added = 0
            for it in catalog:
                if it.id not in self._inventory:
                    self._inventory[it.id] = default_record()
                    added += 1
            self._persist()

        logger.info("Imported %d catalog items (%d new inventory records)", len(catalog), added)
        return list(catalog)

    def update_field(self, item_id: str, field: str, value: Any) -> InventoryRecord:
        """Set one record field, creating the record with defaults if absent.

        Raises ValueError for unknown or read-only fields.
        """
        attr = resolve_field(field)
        if attr is None or attr == "currency":
            writable = sorted(k for k in RECORD_FIELDS if k != "currency")
            raise ValueError(f"Unknown inventory field '{field}'. Valid: {writable}")

        with self._lock:
            rec = self._inventory.setdefault(item_id, default_record())
            setattr(rec, attr, coerce_field_value(attr, value))
            self._persist()
            return rec.copy()

    def add_to_inventory(self, item_id: str) -> InventoryRecord:
        """Mark as owned and bump the count by one (every call increments)."""
        with self._lock:
            rec = self._inventory.setdefault(item_id, default_record())
            rec.have = True
            rec.count += 1
            self._persist()
            return rec.copy()

    def reset_all(self) -> None:
        """Give every catalog item a fresh default record, discarding user data."""
        with self._lock:
            self._inventory = {it.id: default_record() for it in self._catalog}
            self._persist()
        logger.info("Reset inventory for %d items", len(self._catalog))

    # ------------------------------------------------------------------
    # Saved share views
    # ------------------------------------------------------------------

    @property
    def views(self) -> list[SavedShareView]:
        return list(self._views)

    def get_view(self, view_id: str) -> Optional[SavedShareView]:
        return next((v for v in self._views if v.id == view_id), None)

    def save_view(
        self,
        title: str,
        description: str,
        show_values: bool,
        selected_ids: Iterable[str],
    ) -> SavedShareView:
        with self._lock:
            stamp = int(time.time() * 1000)
            taken = {v.id for v in self._views}
            while str(stamp) in taken:
                stamp += 1
            view = SavedShareView(
                id=str(stamp),
                title=title,
                description=description,
                show_values=bool(show_values),
                selected_ids=list(dict.fromkeys(str(i) for i in selected_ids)),
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self._views.append(view)
            self._persist_views()
        return view

    def delete_view(self, view_id: str) -> bool:
        with self._lock:
            before = len(self._views)
            self._views = [v for v in self._views if v.id != view_id]
            if len(self._views) == before:
                return False
            self._persist_views()
        return True


def open_store(directory: str | Path = STORAGE_FOLDER) -> InventoryStore:
    """Store wired to a local storage directory (not yet loaded)."""
    return InventoryStore(PersistenceGateway(LocalStorage(directory)))
