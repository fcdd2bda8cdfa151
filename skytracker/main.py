"""
Skylander Inventory — FastAPI app factory with startup state loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skytracker import __version__
from skytracker.config import STORAGE_FOLDER, EXPORTS_FOLDER
from skytracker.data.store import InventoryStore, open_store
from skytracker.api.dependencies import set_store
from skytracker.api.router_meta import router as meta_router
from skytracker.api.router_inventory import router as inventory_router
from skytracker.api.router_import import router as import_router
from skytracker.api.router_trade import router as trade_router
from skytracker.api.router_share import router as share_router
from skytracker.api.router_export import router as export_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load inventory state at startup."""
    store = app.state.store
    if store is None:
        for d in [STORAGE_FOLDER, EXPORTS_FOLDER]:
            d.mkdir(parents=True, exist_ok=True)
        print(f"  STORAGE_FOLDER = {STORAGE_FOLDER}")
        store = open_store()
    if not store.is_loaded:
        store.load()
    set_store(store)

    if store.item_count() > 0:
        print(f"\nSkylander Inventory ready — {store.item_count():,} Skylanders, "
              f"{len(store.elements())} elements, {len(store.views)} saved views\n")
    else:
        print("\nSkylander Inventory ready — no catalog yet. Import a CSV or Google Sheet.\n")
    yield
    set_store(None)


def create_app(store: InventoryStore | None = None) -> FastAPI:
    app = FastAPI(
        title="Skylander Inventory API",
        description="Skylanders collection tracker — have/need/trade, values, trade lists, share links",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(inventory_router)
    app.include_router(import_router)
    app.include_router(trade_router)
    app.include_router(share_router)
    app.include_router(export_router)

    return app


app = create_app()
