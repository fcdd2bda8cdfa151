"""
Skylander Inventory — Configuration: paths, defaults, storage keys, text literals.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with SKYTRACKER_DATA_DIR env var
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("SKYTRACKER_DATA_DIR", str(Path.home() / ".skytracker")))
STORAGE_FOLDER = _data_dir / "storage"
EXPORTS_FOLDER = _data_dir / "exports"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = os.environ.get("LOG_TO_FILE", "false").lower() == "true"
LOG_FILE = Path(os.environ.get("LOG_FILE", str(_data_dir / "skytracker.log")))
LOG_MAX_BYTES = int(os.environ.get("LOG_MAX_BYTES", str(2 * 1024 * 1024)))
LOG_BACKUPS = int(os.environ.get("LOG_BACKUPS", "3"))

# ---------------------------------------------------------------------------
# Catalog import
# ---------------------------------------------------------------------------
DEFAULT_NAME = "Unknown Skylander"
DEFAULT_ELEMENT = "Unknown"
DEFAULT_CATEGORY = "Figure"
DEFAULT_GAME = "Unknown Game"
SYNTHETIC_ID_PREFIX = "skylander-"

SHEET_URL_PATTERN = r"spreadsheets/d/([a-zA-Z0-9-_]+)"
SHEET_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv"
SHEET_FETCH_TIMEOUT = float(os.environ.get("SHEET_FETCH_TIMEOUT", "30"))

# ---------------------------------------------------------------------------
# Local storage keys (one JSON document per key)
# ---------------------------------------------------------------------------
CATALOG_KEY = "skylanders"
INVENTORY_KEY = "userInventory"
SHARE_VIEWS_KEY = "savedShareViews"
SCHEMA_VERSION_KEY = "schemaVersion"
SCHEMA_VERSION = 1

DEFAULT_CURRENCY = "USD"

# ---------------------------------------------------------------------------
# Trade list text
# ---------------------------------------------------------------------------
TRADE_LIST_HEADER = "Skylanders Available for Trade:"
TRADE_LIST_EMPTY = "No Skylanders currently available for trade."
TRADE_LIST_TRAILER = "Contact me to discuss trades!"

# ---------------------------------------------------------------------------
# Share link defaults
# ---------------------------------------------------------------------------
SHARE_BASE_URL = os.environ.get("SHARE_BASE_URL", "https://skylander-inventory.example.com/shared")
DEFAULT_SHARE_TITLE = "My Skylanders Collection"
DEFAULT_SHARE_DESCRIPTION = "Check out my Skylanders collection!"
