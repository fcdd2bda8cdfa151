"""
Collection workbook — Summary sheet (stat cards, per-element table) and a
Collection sheet with one row per catalog item.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

from skytracker.data.store import InventoryStore
from skytracker.analytics.dashboard import dashboard_stats, element_breakdown
from skytracker.analytics.common import line_value, pct_of_total
from skytracker.excel.workbook import CollectionWorkbook, Column

COLLECTION_COLS = [
    Column("name", "text", "Name"),
    Column("element", "text", "Element"),
    Column("category", "text", "Category"),
    Column("game", "text", "Game"),
    Column("have", "flag", "Have"),
    Column("need", "flag", "Need"),
    Column("forTrade", "flag", "For Trade"),
    Column("count", "number", "Count"),
    Column("value", "currency", "Value Each"),
    Column("total_value", "currency", "Total Value"),
    Column("notes", "text", "Notes"),
]

ELEMENT_COLS = [
    Column("element", "text", "Element"),
    Column("total", "number", "Total"),
    Column("have", "number", "Owned"),
    Column("completion_pct", "percent", "Complete"),
    Column("value", "currency", "Owned Value"),
]


def _status(row: dict) -> str | None:
    if not row.get("have"):
        return None
    return "trade" if row.get("forTrade") else "owned"


def collection_rows(store: InventoryStore) -> list[dict]:
    """One dict per catalog item; total_value counts owned items only."""
    rows = []
    for item in store.catalog:
        rec = store.record(item.id)
        row = {**item.to_dict(), **rec.to_dict()}
        row["total_value"] = line_value(rec.value, rec.count) if rec.have else 0.0
        rows.append(row)
    return rows


def export_collection_workbook(store: InventoryStore, output_path: str | Path) -> Path:
    stats = dashboard_stats(store)
    book = CollectionWorkbook()

    ws = book.sheet("Summary")
    row = book.banner(ws, "SKYLANDERS COLLECTION", f"Exported {datetime.now():%B %d, %Y}")
    row = book.section(ws, row, "COLLECTION OVERVIEW")
    row = book.cards(ws, row, [
        (stats["have"], "OWNED", "number"),
        (stats["total"], "IN CATALOG", "number"),
        (round(pct_of_total(stats["have"], stats["total"]), 1), "COMPLETE", "percent"),
        (stats["need"], "NEEDED", "number"),
        (stats["forTrade"], "FOR TRADE", "number"),
        (stats["totalValue"], "COLLECTION VALUE", "currency"),
    ])
    row = book.section(ws, row, "BY ELEMENT")
    book.table(ws, row, ELEMENT_COLS, element_breakdown(store), totals=True, freeze=False)

    book.table(book.sheet("Collection"), 1, COLLECTION_COLS, collection_rows(store),
               status=_status, totals=True)

    return book.save(output_path)
