"""
Catalog sources: CSV text/files parsed with pandas, and published Google
Sheets resolved to their CSV export endpoint.
"""
from __future__ import annotations

import io
import re
from pathlib import Path

import pandas as pd
import requests

from skytracker.config import SHEET_URL_PATTERN, SHEET_EXPORT_URL, SHEET_FETCH_TIMEOUT
from skytracker.data.normalize import normalize_frame
from skytracker.data.schemas import CatalogItem
from skytracker.errors import CatalogImportError, SheetFetchError
from skytracker.log import get_logger

logger = get_logger(__name__)

INVALID_SHEET_URL = "Invalid Google Sheets URL. Please provide a valid sharing link."
SHEET_FETCH_FAILED = "Failed to fetch Google Sheet. Make sure it is publicly accessible."

_SHEET_RE = re.compile(SHEET_URL_PATTERN)


# ---------------------------------------------------------------------------
# CSV parsing
# ---------------------------------------------------------------------------

def parse_csv_frame(text: str) -> pd.DataFrame:
    """Parse CSV text (header row required) into an all-string DataFrame."""
    text = text.lstrip("\ufeff")
    if not text.strip():
        raise CatalogImportError("Error parsing CSV: the file is empty.")
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise CatalogImportError(f"Error parsing CSV: {e}") from e
    df.columns = [str(c).strip() for c in df.columns]
    return df


def parse_csv_text(text: str) -> list[dict]:
    """Parse CSV text into a list of row dicts keyed by header name."""
    return parse_csv_frame(text).to_dict("records")


def read_csv_file(path: str | Path) -> list[dict]:
    """Read a UTF-8 CSV file (BOM tolerated) into row dicts."""
    return parse_csv_text(_read_text(Path(path)))


def _read_text(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CatalogImportError(f"Error parsing CSV: {path.name} is not UTF-8 text") from e
    except OSError as e:
        raise CatalogImportError(f"Error reading {path}: {e}") from e


def decode_upload(content: bytes, filename: str = "upload.csv") -> str:
    """Decode an uploaded CSV body."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CatalogImportError(f"Error parsing CSV: {filename} is not UTF-8 text") from e


# ---------------------------------------------------------------------------
# Google Sheets
# ---------------------------------------------------------------------------

def sheet_export_url(url: str) -> str:
    """Resolve a sharing URL containing ``spreadsheets/d/<id>`` to its CSV export URL."""
    m = _SHEET_RE.search(url or "")
    if not m:
        raise SheetFetchError(INVALID_SHEET_URL)
    return SHEET_EXPORT_URL.format(sheet_id=m.group(1))


def fetch_sheet_csv(
    url: str,
    session: requests.Session | None = None,
    timeout: float = SHEET_FETCH_TIMEOUT,
) -> str:
    """Download a public sheet as CSV text. No retry: failures go back to the caller."""
    csv_url = sheet_export_url(url)
    http = session or requests.Session()
    logger.info("Fetching Google Sheet export: %s", csv_url)
    try:
        resp = http.get(csv_url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Sheet fetch failed for %s: %s", csv_url, e)
        raise SheetFetchError(SHEET_FETCH_FAILED) from e

    if not 200 <= resp.status_code < 300:
        logger.warning("Sheet export returned status %s at %s", resp.status_code, csv_url)
        raise SheetFetchError(SHEET_FETCH_FAILED)
    return resp.text


# ---------------------------------------------------------------------------
# Convenience: source → normalized catalog
# ---------------------------------------------------------------------------

def load_catalog_from_csv(text: str) -> list[CatalogItem]:
    return normalize_frame(parse_csv_frame(text))


def load_catalog_from_file(path: str | Path) -> list[CatalogItem]:
    return load_catalog_from_csv(_read_text(Path(path)))


def load_catalog_from_sheet(url: str, session: requests.Session | None = None) -> list[CatalogItem]:
    return load_catalog_from_csv(fetch_sheet_csv(url, session=session))
