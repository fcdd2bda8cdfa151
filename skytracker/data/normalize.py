"""
Row normalization — loosely-typed CSV/sheet rows into canonical CatalogItems.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

import pandas as pd

from skytracker.config import (
    DEFAULT_NAME, DEFAULT_ELEMENT, DEFAULT_CATEGORY, DEFAULT_GAME, SYNTHETIC_ID_PREFIX,
)
from skytracker.data.schemas import CatalogItem
from skytracker.errors import CatalogImportError

NO_VALID_ROWS = "No valid Skylander data found in the imported file."


# ---------------------------------------------------------------------------
# Cell cleaning
# ---------------------------------------------------------------------------

def _cell(row: Mapping[str, Any], key: str) -> str:
    """Trimmed string value of a cell; missing, None and NaN become ""."""
    value = row.get(key)
    if value is None:
        return ""
    if not isinstance(value, str) and pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    return str(value).strip()


def synthetic_id(index: int) -> str:
    return f"{SYNTHETIC_ID_PREFIX}{index}"


# ---------------------------------------------------------------------------
# Row → CatalogItem
# ---------------------------------------------------------------------------

def normalize_row(row: Mapping[str, Any], index: int) -> CatalogItem:
    """Map one input row to a CatalogItem, filling placeholders.

    ``index`` is the row's position in the raw input, before blank
    rows are dropped.
    """
    return CatalogItem(
        id=_cell(row, "id") or synthetic_id(index),
        name=_cell(row, "name") or DEFAULT_NAME,
        element=_cell(row, "element") or DEFAULT_ELEMENT,
        category=_cell(row, "category") or DEFAULT_CATEGORY,
        game=_cell(row, "game") or DEFAULT_GAME,
        image_url=_cell(row, "imageUrl") or _cell(row, "image"),
        link=_cell(row, "link"),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[CatalogItem]:
    """Drop nameless rows and normalize the rest.

    Raises CatalogImportError when no row has a name.
    """
    items = [
        normalize_row(row, index)
        for index, row in enumerate(rows)
        if _cell(row, "name")
    ]
    if not items:
        raise CatalogImportError(NO_VALID_ROWS)
    return items


def normalize_frame(df: pd.DataFrame) -> list[CatalogItem]:
    """Normalize every row of a parsed CSV DataFrame."""
    return normalize_rows(df.to_dict("records"))
