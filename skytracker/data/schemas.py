"""
Catalog, inventory and share-view records, plus the view filter used by the
dashboard and trade pages.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from skytracker.config import (
    DEFAULT_NAME, DEFAULT_ELEMENT, DEFAULT_CATEGORY, DEFAULT_GAME, DEFAULT_CURRENCY,
)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CatalogItem:
    """One collectible figure. Replaced wholesale on re-import."""
    id: str
    name: str = DEFAULT_NAME
    element: str = DEFAULT_ELEMENT
    category: str = DEFAULT_CATEGORY
    game: str = DEFAULT_GAME
    image_url: str = ""
    link: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "element": self.element,
            "category": self.category,
            "game": self.game,
            "imageUrl": self.image_url,
            "link": self.link,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogItem":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or DEFAULT_NAME,
            element=data.get("element") or DEFAULT_ELEMENT,
            category=data.get("category") or DEFAULT_CATEGORY,
            game=data.get("game") or DEFAULT_GAME,
            image_url=data.get("imageUrl") or "",
            link=data.get("link") or "",
        )


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

# Serialized name -> attribute name
RECORD_FIELDS = {
    "have": "have",
    "need": "need",
    "forTrade": "for_trade",
    "count": "count",
    "value": "value",
    "currency": "currency",
    "notes": "notes",
}


@dataclass
class InventoryRecord:
    """Per-item ownership metadata, keyed by catalog id."""
    have: bool = False
    need: bool = False
    for_trade: bool = False
    count: int = 0
    value: float = 0.0
    currency: str = DEFAULT_CURRENCY
    notes: str = ""

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for key, attr in RECORD_FIELDS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "InventoryRecord":
        """Build a record from stored JSON; missing fields take their defaults."""
        rec = default_record()
        for key, attr in RECORD_FIELDS.items():
            if key in data and data[key] is not None:
                setattr(rec, attr, coerce_field_value(attr, data[key]))
        return rec

    def copy(self) -> "InventoryRecord":
        return replace(self)


def default_record() -> InventoryRecord:
    """The zero-valued record every catalog item starts with."""
    return InventoryRecord(
        have=False,
        need=False,
        for_trade=False,
        count=0,
        value=0.0,
        currency=DEFAULT_CURRENCY,
        notes="",
    )


# ---------------------------------------------------------------------------
# Saved share views
# ---------------------------------------------------------------------------

@dataclass
class SavedShareView:
    id: str
    title: str
    description: str
    show_values: bool = False
    selected_ids: list[str] = field(default_factory=list)
    created_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "showValues": self.show_values,
            "selectedIds": list(self.selected_ids),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SavedShareView":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            show_values=bool(data.get("showValues", False)),
            selected_ids=[str(i) for i in data.get("selectedIds", [])],
            created_at=data.get("createdAt", ""),
        )


# ---------------------------------------------------------------------------
# View filter
# ---------------------------------------------------------------------------

class StatusFilter(str, Enum):
    ALL = "all"
    HAVE = "have"
    NEED = "need"
    TRADE = "trade"


class SortKey(str, Enum):
    NAME = "name"
    ELEMENT = "element"
    VALUE = "value"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


ALL_ELEMENTS = "all"


@dataclass
class ViewFilter:
    """Dashboard filter/sort controls."""
    status: StatusFilter = StatusFilter.ALL
    element: str = ALL_ELEMENTS
    search: str = ""
    sort_key: SortKey = SortKey.NAME
    direction: SortDirection = SortDirection.ASC

    @property
    def label(self) -> str:
        """Human-readable summary of the active filters."""
        parts = []
        if self.status != StatusFilter.ALL:
            parts.append(f"status={self.status.value}")
        if self.element and self.element != ALL_ELEMENTS:
            parts.append(f"element={self.element}")
        if self.search:
            parts.append(f"search='{self.search}'")
        parts.append(f"sort={self.sort_key.value} {self.direction.value}")
        return ", ".join(parts)


def _finite_float(value: Any) -> float:
    """float(value), or 0.0 when it is unparseable, too large, NaN or infinite."""
    try:
        v = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return v if math.isfinite(v) else 0.0


def coerce_field_value(attr: str, value: Any) -> Any:
    """Coerce an incoming update to the record attribute's type.

    Numbers are clamped at zero; unparseable or non-finite numbers become zero.
    """
    if attr in ("have", "need", "for_trade"):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if attr == "count":
        return max(int(_finite_float(value)), 0)
    if attr == "value":
        return max(_finite_float(value), 0.0)
    if attr == "notes":
        return "" if value is None else str(value)
    return value


def resolve_field(name: str) -> Optional[str]:
    """Map a serialized or attribute field name to the record attribute."""
    if name in RECORD_FIELDS:
        return RECORD_FIELDS[name]
    if name in RECORD_FIELDS.values():
        return name
    return None
