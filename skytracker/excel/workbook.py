"""
CollectionWorkbook — openpyxl builder for the collection export: banner,
stat cards and striped tables with an optional totals row.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, NamedTuple, Optional

from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from skytracker.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT, HEADER_FONT, BODY_FONT, TOTAL_FONT,
    CARD_VALUE_FONT, CARD_LABEL_FONT, HEADER_FILL, STRIPE_FILL, TOTAL_FILL, STATUS_FILLS,
    GRID_BORDER, HEADER_BORDER, TOTAL_BORDER, ALIGN, CENTER, NUMBER_FORMATS,
)


class Column(NamedTuple):
    key: str
    kind: str  # text | flag | number | currency | percent
    label: str


SUMMED_KINDS = ("number", "currency")


def style_cell(cell: Cell, kind: str, total: bool = False) -> None:
    cell.font = TOTAL_FONT if total else BODY_FONT
    cell.border = TOTAL_BORDER if total else GRID_BORDER
    cell.alignment = ALIGN.get(kind, ALIGN["text"])
    if kind in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[kind]


def cell_value(value, kind: str):
    """Flags print as Yes/blank; None prints blank."""
    if value is None:
        return ""
    if kind == "flag" and isinstance(value, bool):
        return "Yes" if value else ""
    return value


def put_value(ws: Worksheet, row: int, col: int, value) -> Cell:
    """Write a cell, keeping strings that start with "=" as literal text."""
    cell = ws.cell(row=row, column=col, value=value)
    if isinstance(value, str) and value.startswith("="):
        cell.data_type = "s"
    return cell


def fit_columns(ws: Worksheet, lo: int = 10, hi: int = 55) -> None:
    """Size each column to its longest value, within [lo, hi]."""
    for idx, column in enumerate(ws.iter_cols(), 1):
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(idx)].width = min(max(longest + 2, lo), hi)


class CollectionWorkbook:

    def __init__(self) -> None:
        self.wb = Workbook()
        self._fresh = True

    def sheet(self, title: str) -> Worksheet:
        # openpyxl starts with one empty sheet; take it over first
        if self._fresh:
            self._fresh = False
            ws = self.wb.active
            ws.title = title
            return ws
        return self.wb.create_sheet(title=title)

    def banner(self, ws: Worksheet, title: str, subtitle: str, span: int = 8) -> int:
        """Title and subtitle across the first `span` columns. Returns the next free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)
        return 4

    def section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    def cards(self, ws: Worksheet, row: int, cards: Iterable[tuple], gap: int = 2) -> int:
        """Big-number stat cards, each (value, label, kind), laid out left to right."""
        for i, (value, label, kind) in enumerate(cards):
            col = 1 + i * gap
            top = ws.cell(row=row, column=col, value=value)
            top.font = CARD_VALUE_FONT
            top.alignment = CENTER
            if kind in NUMBER_FORMATS:
                top.number_format = NUMBER_FORMATS[kind]
            bottom = ws.cell(row=row + 1, column=col, value=label)
            bottom.font = CARD_LABEL_FONT
            bottom.alignment = CENTER
        return row + 3

    def table(
        self,
        ws: Worksheet,
        row: int,
        columns: list[Column],
        rows: list[dict],
        status: Optional[Callable[[dict], Optional[str]]] = None,
        totals: bool = False,
        freeze: bool = True,
    ) -> int:
        """Header, one line per row dict, optional TOTAL line. Returns the next free row.

        ``status(row)`` may return a key of STATUS_FILLS to tint that line.
        """
        header_row = row
        for col, column in enumerate(columns, 1):
            cell = ws.cell(row=row, column=col, value=column.label)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.border = HEADER_BORDER
            cell.alignment = CENTER

        for data in rows:
            row += 1
            fill = STATUS_FILLS.get(status(data)) if status else None
            if fill is None and row % 2 == 0:
                fill = STRIPE_FILL
            for col, column in enumerate(columns, 1):
                cell = put_value(ws, row, col, cell_value(data.get(column.key), column.kind))
                style_cell(cell, column.kind)
                if fill is not None:
                    cell.fill = fill

        if totals and rows:
            row += 1
            for col, column in enumerate(columns, 1):
                if col == 1:
                    value, kind = "TOTAL", "text"
                elif column.kind in SUMMED_KINDS:
                    value, kind = sum(r.get(column.key) or 0 for r in rows), column.kind
                else:
                    value, kind = "", "text"
                cell = ws.cell(row=row, column=col, value=value)
                style_cell(cell, kind, total=True)
                cell.fill = TOTAL_FILL

        fit_columns(ws)
        if freeze:
            ws.freeze_panes = f"A{header_row + 1}"
        return row + 1

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
