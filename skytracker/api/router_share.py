"""
Share endpoints — share payload + link, and saved share views.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from skytracker.data.store import InventoryStore
from skytracker.data.schemas import SavedShareView
from skytracker.api.dependencies import get_store, with_save_status
from skytracker.api.response_models import ShareCreateRequest, ShareResponse, SavedViewResponse
from skytracker.analytics.share import build_share_payload, encode_share_link, owned_ids

router = APIRouter(prefix="/api/share", tags=["sharing"])


def _share(store: InventoryStore, title: str, description: str, show_values: bool, ids: list[str]) -> dict:
    payload = build_share_payload(store, title, description, show_values, ids)
    return {**payload, "link": encode_share_link(payload)}


def _selection(store: InventoryStore, req: ShareCreateRequest) -> list[str]:
    return owned_ids(store) if req.select_owned else req.selected_ids


@router.post("", response_model=ShareResponse)
def create_share(req: ShareCreateRequest, store: InventoryStore = Depends(get_store)):
    """Build the share payload for the selection and its self-contained link."""
    return _share(store, req.title, req.description, req.show_values, _selection(store, req))


@router.get("/views", response_model=list[SavedViewResponse])
def list_views(store: InventoryStore = Depends(get_store)):
    return [v.to_dict() for v in store.views]


@router.post("/views")
def save_view(req: ShareCreateRequest, store: InventoryStore = Depends(get_store)):
    view = store.save_view(req.title, req.description, req.show_values, _selection(store, req))
    return with_save_status(store, {"view": view.to_dict()})


def _require_view(store: InventoryStore, view_id: str) -> SavedShareView:
    view = store.get_view(view_id)
    if view is None:
        raise HTTPException(404, f"Saved view not found: {view_id}")
    return view


@router.get("/views/{view_id}")
def get_view(view_id: str, store: InventoryStore = Depends(get_store)):
    """A saved view plus its freshly built share payload."""
    view = _require_view(store, view_id)
    share = _share(store, view.title, view.description, view.show_values, view.selected_ids)
    return {"view": view.to_dict(), "share": share}


@router.delete("/views/{view_id}")
def delete_view(view_id: str, store: InventoryStore = Depends(get_store)):
    _require_view(store, view_id)
    store.delete_view(view_id)
    return with_save_status(store, {"status": "deleted", "id": view_id})
