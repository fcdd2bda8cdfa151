"""
Trade endpoints: tradeable items with summary, and the plain-text trade list.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from skytracker.data.store import InventoryStore
from skytracker.data.schemas import ALL_ELEMENTS
from skytracker.api.dependencies import get_store
from skytracker.analytics.trade import trade_summary, trade_list_text

router = APIRouter(prefix="/api/trade", tags=["trade"])


@router.get("")
def trade(
    search: str = Query(""),
    element: str = Query(ALL_ELEMENTS),
    store: InventoryStore = Depends(get_store),
):
    return trade_summary(store, search, element)


@router.get("/text", response_class=PlainTextResponse)
def trade_text(
    search: str = Query(""),
    element: str = Query(ALL_ELEMENTS),
    store: InventoryStore = Depends(get_store),
):
    """Copy-paste trade list for forums and social media."""
    return PlainTextResponse(trade_list_text(store, search, element))
