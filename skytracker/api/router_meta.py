"""
Meta endpoints: health, element list, dashboard stats.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from skytracker.data.store import InventoryStore
from skytracker.api.dependencies import get_store
from skytracker.api.response_models import HealthResponse, ElementsResponse, DashboardStats
from skytracker.analytics.dashboard import dashboard_stats, element_options, collection_summary

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: InventoryStore = Depends(get_store)):
    return HealthResponse(
        status="ok",
        items=store.item_count(),
        records=len(store.inventory),
        views=len(store.views),
        elements=len(store.elements()),
    )


@router.get("/elements", response_model=ElementsResponse)
def list_elements(store: InventoryStore = Depends(get_store)):
    return ElementsResponse(elements=element_options(store))


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(store: InventoryStore = Depends(get_store)):
    """Total / have / need / for-trade counts and owned collection value."""
    return DashboardStats(**dashboard_stats(store))


@router.get("/dashboard/summary")
def dashboard_summary(store: InventoryStore = Depends(get_store)):
    """Stats plus completion percentage and per-element breakdown."""
    return collection_summary(store)
