"""
Import endpoints: CSV upload (preview or commit) and public Google Sheet.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File

from skytracker.data.store import InventoryStore
from skytracker.data.loader import decode_upload, load_catalog_from_csv, load_catalog_from_sheet
from skytracker.data.schemas import CatalogItem
from skytracker.api.dependencies import get_store, with_save_status
from skytracker.api.response_models import SheetImportRequest
from skytracker.errors import CatalogImportError, SheetFetchError

router = APIRouter(prefix="/api/import", tags=["import"])

PREVIEW_ROWS = 10


async def _items_from_upload(file: UploadFile) -> list[CatalogItem]:
    filename = file.filename or "upload.csv"
    if not filename.lower().endswith(".csv"):
        raise HTTPException(400, f"Only .csv files are accepted (got '{filename}')")
    try:
        return load_catalog_from_csv(decode_upload(await file.read(), filename))
    except CatalogImportError as e:
        raise HTTPException(400, str(e))


def _commit(store: InventoryStore, items: list[CatalogItem], source: str) -> dict:
    imported = store.import_catalog(items)
    return with_save_status(store, {
        "status": "imported",
        "source": source,
        "count": len(imported),
    })


@router.post("/preview")
async def preview_csv(file: UploadFile = File(...)):
    """Normalize an uploaded CSV without touching the store."""
    items = await _items_from_upload(file)
    return {
        "count": len(items),
        "items": [it.to_dict() for it in items[:PREVIEW_ROWS]],
    }


@router.post("/csv")
async def import_csv(file: UploadFile = File(...), store: InventoryStore = Depends(get_store)):
    items = await _items_from_upload(file)
    return _commit(store, items, file.filename or "upload.csv")


@router.post("/sheet")
def import_sheet(req: SheetImportRequest, store: InventoryStore = Depends(get_store)):
    """Fetch a publicly shared Google Sheet as CSV and import it."""
    try:
        items = load_catalog_from_sheet(req.url)
    except (SheetFetchError, CatalogImportError) as e:
        raise HTTPException(400, str(e))
    return _commit(store, items, req.url)
