"""
Export endpoint: styled collection workbook.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from skytracker.config import EXPORTS_FOLDER
from skytracker.data.store import InventoryStore
from skytracker.api.dependencies import get_store
from skytracker.excel.collection import export_collection_workbook

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("/excel")
def export_excel(store: InventoryStore = Depends(get_store)):
    path = export_collection_workbook(store, EXPORTS_FOLDER / "Skylanders_Collection.xlsx")
    return FileResponse(path=str(path), filename=path.name,
                        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
