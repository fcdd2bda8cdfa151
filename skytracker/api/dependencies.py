"""
FastAPI dependencies — InventoryStore singleton, view-filter parsing.
"""
from __future__ import annotations

from fastapi import HTTPException, Query

from skytracker.data.store import InventoryStore
from skytracker.data.schemas import ViewFilter, StatusFilter, SortKey, SortDirection, ALL_ELEMENTS

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: InventoryStore | None = None


def set_store(store: InventoryStore | None) -> None:
    global _store
    _store = store


def get_store() -> InventoryStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Inventory not loaded yet")
    return _store


# ---------------------------------------------------------------------------
# Filter parsing from query params
# ---------------------------------------------------------------------------

def parse_view_filter(
    status: str = Query("all", description="all|have|need|trade"),
    element: str = Query(ALL_ELEMENTS, description="Element name or 'all'"),
    search: str = Query("", description="Substring of name, element or category"),
    sort: str = Query("name", description="name|element|value"),
    direction: str = Query("asc", description="asc|desc"),
) -> ViewFilter:
    """Parse dashboard filter query parameters into a ViewFilter."""
    try:
        st = StatusFilter(status)
    except ValueError:
        raise HTTPException(400, f"Invalid status: {status}")
    try:
        key = SortKey(sort)
    except ValueError:
        raise HTTPException(400, f"Invalid sort: {sort}")
    try:
        dr = SortDirection(direction)
    except ValueError:
        raise HTTPException(400, f"Invalid direction: {direction}")

    return ViewFilter(status=st, element=element, search=search, sort_key=key, direction=dr)


def with_save_status(store: InventoryStore, data: dict) -> dict:
    """Attach the outcome of the last persistence write to a mutation response."""
    data["saved"] = store.save_error is None
    if store.save_error is not None:
        data["warning"] = f"Changes are kept in memory but were not saved: {store.save_error}"
    return data
