"""
Inventory endpoints: filtered catalog listing, item detail, field updates,
add-one, reset.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from skytracker.data.store import InventoryStore
from skytracker.data.schemas import ViewFilter
from skytracker.api.dependencies import get_store, parse_view_filter, with_save_status
from skytracker.api.response_models import FieldUpdateRequest
from skytracker.analytics.dashboard import filter_rows

router = APIRouter(prefix="/api", tags=["inventory"])


def _require_item(store: InventoryStore, item_id: str):
    item = store.item(item_id)
    if item is None:
        raise HTTPException(404, f"Skylander not found: {item_id}")
    return item


@router.get("/items")
def list_items(
    store: InventoryStore = Depends(get_store),
    view: ViewFilter = Depends(parse_view_filter),
):
    """Catalog rows joined with inventory, filtered and sorted."""
    rows = filter_rows(store, view)
    return {"filter": view.label, "count": len(rows), "items": rows}


@router.get("/items/{item_id}")
def get_item(item_id: str, store: InventoryStore = Depends(get_store)):
    item = _require_item(store, item_id)
    return {**item.to_dict(), **store.record(item_id).to_dict()}


@router.patch("/items/{item_id}")
def update_item(item_id: str, req: FieldUpdateRequest, store: InventoryStore = Depends(get_store)):
    """Set one inventory field (have, need, forTrade, count, value, notes)."""
    _require_item(store, item_id)
    try:
        rec = store.update_field(item_id, req.field, req.value)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return with_save_status(store, {"id": item_id, "record": rec.to_dict()})


@router.post("/items/{item_id}/add")
def add_item(item_id: str, store: InventoryStore = Depends(get_store)):
    """Mark as owned and add one to the count (used after a scan match)."""
    _require_item(store, item_id)
    rec = store.add_to_inventory(item_id)
    return with_save_status(store, {"id": item_id, "record": rec.to_dict()})


@router.post("/inventory/reset")
def reset_inventory(store: InventoryStore = Depends(get_store)):
    """Discard all ownership data; the catalog itself is kept."""
    store.reset_all()
    return with_save_status(store, {"status": "reset", "items": store.item_count()})
