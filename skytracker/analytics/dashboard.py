"""
Dashboard views — collection stats and the filter/sort pipeline.

All functions are pure: they read the store and return fresh projections.
"""
from __future__ import annotations

import pandas as pd

from skytracker.data.store import InventoryStore
from skytracker.data.schemas import (
    CatalogItem, ViewFilter, StatusFilter, SortKey, SortDirection, ALL_ELEMENTS,
)
from skytracker.analytics.common import pct_of_total, sanitize_for_json

_STATUS_COLUMNS = {
    StatusFilter.HAVE: "have",
    StatusFilter.NEED: "need",
    StatusFilter.TRADE: "forTrade",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _holding_value(df: pd.DataFrame) -> pd.Series:
    """value × count for owned rows, 0 otherwise."""
    owned = df["have"].astype(bool)
    return (df["value"].astype(float) * df["count"].astype(int)).where(owned, 0.0)


def search_mask(df: pd.DataFrame, search: str) -> pd.Series:
    """Case-insensitive substring match on name, element or category."""
    query = (search or "").strip().lower()
    if not query:
        return pd.Series(True, index=df.index)
    mask = pd.Series(False, index=df.index)
    for col in ("name", "element", "category"):
        mask |= df[col].astype(str).str.lower().str.contains(query, regex=False)
    return mask


def element_mask(df: pd.DataFrame, element: str | None) -> pd.Series:
    if not element or element == ALL_ELEMENTS:
        return pd.Series(True, index=df.index)
    return df["element"] == element


def sort_frame(df: pd.DataFrame, key: SortKey, direction: SortDirection) -> pd.DataFrame:
    """Sort by key; ties keep their incoming order in both directions."""
    if df.empty:
        return df
    if key == SortKey.VALUE:
        sort_key = df["value"].astype(float)
    else:
        sort_key = df[key.value].astype(str).str.lower()
    ordered = df.assign(_key=sort_key, _pos=range(len(df)))
    ascending = direction == SortDirection.ASC
    ordered = ordered.sort_values(["_key", "_pos"], ascending=[ascending, True])
    return ordered.drop(columns=["_key", "_pos"])


def frame_items(store: InventoryStore, df: pd.DataFrame) -> list[CatalogItem]:
    """Map frame rows back to the store's CatalogItems, keeping row order."""
    by_id = {it.id: it for it in store.catalog}
    return [by_id[i] for i in df["id"] if i in by_id]


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

def dashboard_stats(store: InventoryStore) -> dict:
    """Total items, have/need/trade counts and owned collection value."""
    df = store.to_frame()
    if df.empty:
        return {"total": 0, "have": 0, "need": 0, "forTrade": 0, "totalValue": 0.0}
    return sanitize_for_json({
        "total": len(df),
        "have": int(df["have"].astype(bool).sum()),
        "need": int(df["need"].astype(bool).sum()),
        "forTrade": int(df["forTrade"].astype(bool).sum()),
        "totalValue": float(_holding_value(df).sum()),
    })


def element_options(store: InventoryStore) -> list[str]:
    """Choices for the element filter: "all" then each distinct element."""
    return [ALL_ELEMENTS] + store.elements()


def element_breakdown(store: InventoryStore) -> list[dict]:
    """Per-element owned/total counts and owned value, largest element first."""
    df = store.to_frame()
    if df.empty:
        return []
    df = df.assign(owned=df["have"].astype(bool).astype(int), holding=_holding_value(df))
    agg = df.groupby("element").agg(
        total=("id", "count"),
        have=("owned", "sum"),
        value=("holding", "sum"),
    ).reset_index().sort_values(["total", "element"], ascending=[False, True])

    rows = []
    for _, r in agg.iterrows():
        rows.append({
            "element": r["element"],
            "total": int(r["total"]),
            "have": int(r["have"]),
            "completion_pct": round(pct_of_total(float(r["have"]), float(r["total"])), 1),
            "value": float(r["value"]),
        })
    return rows


def collection_summary(store: InventoryStore) -> dict:
    """Stats plus completion percentage and element breakdown."""
    stats = dashboard_stats(store)
    return sanitize_for_json({
        "stats": stats,
        "completion_pct": round(pct_of_total(stats["have"], stats["total"]), 1),
        "elements": element_breakdown(store),
    })


# ---------------------------------------------------------------------------
# Filter / sort pipeline
# ---------------------------------------------------------------------------

def filter_frame(store: InventoryStore, view: ViewFilter | None = None) -> pd.DataFrame:
    """Joined catalog rows matching every filter, sorted per the view."""
    view = view or ViewFilter()
    df = store.to_frame()
    if df.empty:
        return df

    col = _STATUS_COLUMNS.get(view.status)
    mask = df[col].astype(bool) if col else pd.Series(True, index=df.index)
    mask &= element_mask(df, view.element)
    mask &= search_mask(df, view.search)

    return sort_frame(df[mask], view.sort_key, view.direction)


def filter_catalog(store: InventoryStore, view: ViewFilter | None = None) -> list[CatalogItem]:
    return frame_items(store, filter_frame(store, view))


def filter_rows(store: InventoryStore, view: ViewFilter | None = None) -> list[dict]:
    """Filtered rows as JSON-safe dicts (catalog fields + inventory fields)."""
    return sanitize_for_json(filter_frame(store, view).to_dict("records"))
