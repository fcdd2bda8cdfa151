"""Catalog loading, normalization, persistence and the in-memory inventory store."""
from .loader import parse_csv_text, read_csv_file, sheet_export_url, fetch_sheet_csv
from .normalize import normalize_rows, normalize_row
from .persistence import LocalStorage, PersistenceGateway
from .schemas import CatalogItem, InventoryRecord, SavedShareView, ViewFilter, default_record
from .store import InventoryStore
