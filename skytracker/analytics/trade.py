"""
Trade views — tradeable items, trade summary and the copy-paste trade list.
"""
from __future__ import annotations

import pandas as pd

from skytracker.config import TRADE_LIST_HEADER, TRADE_LIST_EMPTY, TRADE_LIST_TRAILER
from skytracker.data.store import InventoryStore
from skytracker.data.schemas import CatalogItem, SortKey, SortDirection
from skytracker.analytics.common import sanitize_for_json
from skytracker.analytics.dashboard import element_mask, search_mask, sort_frame, frame_items


def tradeable_frame(store: InventoryStore, search: str = "", element: str | None = None) -> pd.DataFrame:
    """Owned items marked for trade, filtered, sorted by name ascending."""
    df = store.to_frame()
    if df.empty:
        return df
    mask = df["forTrade"].astype(bool) & df["have"].astype(bool)
    mask &= element_mask(df, element)
    mask &= search_mask(df, search)
    return sort_frame(df[mask], SortKey.NAME, SortDirection.ASC)


def tradeable_items(store: InventoryStore, search: str = "", element: str | None = None) -> list[CatalogItem]:
    return frame_items(store, tradeable_frame(store, search, element))


def trade_line(name: str, element: str, count: int, value: float) -> str:
    """One trade-list line. A zero count shows as 1; value only when positive."""
    line = f"{name} ({element}) - {int(count) or 1} available"
    if value > 0:
        line += f" - Value: {value:.2f} each"
    return line


def trade_list_text(store: InventoryStore, search: str = "", element: str | None = None) -> str:
    df = tradeable_frame(store, search, element)
    text = f"{TRADE_LIST_HEADER}\n\n"
    for _, r in df.iterrows():
        text += trade_line(r["name"], r["element"], int(r["count"]), float(r["value"])) + "\n"

    if df.empty:
        text += TRADE_LIST_EMPTY
    else:
        text += f"\n{TRADE_LIST_TRAILER}"
    return text


def trade_summary(store: InventoryStore, search: str = "", element: str | None = None) -> dict:
    """Tradeable rows plus their count and total value (value × count)."""
    df = tradeable_frame(store, search, element)
    if df.empty:
        return {"count": 0, "totalValue": 0.0, "items": []}
    total = float((df["value"].astype(float) * df["count"].astype(int)).sum())
    return sanitize_for_json({
        "count": len(df),
        "totalValue": round(total, 2),
        "items": df.to_dict("records"),
    })
