# menu2pos/workbook.py
"""
Workbook serializer: writes projected ExportTables to a multi-sheet XLSX
and reads the Items sheet back.

The file is written whole, once per export. Every value is stored as a
string cell; a value that happens to start with "=" is stored as text, not
as a formula, so names/descriptions/prices read back exactly as written.
Control characters XLSX cannot store are dropped on the way in.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill

from .mappers.schema_projector import ITEM_COLUMNS, SHEET_ITEMS
from .menu_types import ExportTable

log = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(start_color="1a2236", end_color="1a2236", fill_type="solid")

# Longest string an XLSX cell holds; openpyxl cuts anything past it
CELL_TEXT_MAX = 32767


def build_workbook(tables: Sequence[ExportTable]) -> Workbook:
    """One sheet per table, in the given order, header row first."""
    wb = Workbook()
    wb.remove(wb.active)

    for table in tables:
        ws = wb.create_sheet(title=table.name[:31])
        for ci, col in enumerate(table.columns, start=1):
            cell = ws.cell(row=1, column=ci, value=col)
            cell.font = _HEADER_FONT
            cell.fill = _HEADER_FILL

        for ri, row in enumerate(table.rows, start=2):
            for ci, value in enumerate(row, start=1):
                if isinstance(value, str):
                    value = ILLEGAL_CHARACTERS_RE.sub("", value)
                cell = ws.cell(row=ri, column=ci, value=value)
                if cell.data_type == "f":
                    cell.data_type = "s"

        for ci, col in enumerate(table.columns, start=1):
            ws.column_dimensions[ws.cell(row=1, column=ci).column_letter].width = max(10, len(col) + 4)
        ws.freeze_panes = "A2"

    return wb


def write_workbook(tables: Sequence[ExportTable], path: Optional[Union[str, Path]] = None) -> Union[bytes, Path]:
    """
    Serialize `tables`. Returns the XLSX bytes, or the written Path when
    `path` is given.
    """
    wb = build_workbook(tables)
    if path is not None:
        out_path = Path(path)
        wb.save(out_path)
        log.info("wrote workbook %s (%d sheets)", out_path, len(tables))
        return out_path

    buf = io.BytesIO()
    wb.save(buf)
    data = buf.getvalue()
    log.info("built workbook in memory (%d sheets, %d bytes)", len(tables), len(data))
    return data


def read_item_rows(source: Union[bytes, str, Path]) -> List[Dict[str, str]]:
    """
    Read the Items sheet back into dicts keyed by ITEM_COLUMNS.
    Empty cells come back as "".
    """
    handle = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else Path(source)
    wb = load_workbook(handle, read_only=True)
    try:
        if SHEET_ITEMS not in wb.sheetnames:
            raise ValueError(f"workbook has no {SHEET_ITEMS!r} sheet")
        ws = wb[SHEET_ITEMS]
        rows_iter = ws.iter_rows(values_only=True)
        try:
            header = [str(c) if c is not None else "" for c in next(rows_iter)]
        except StopIteration:
            raise ValueError(f"{SHEET_ITEMS!r} sheet is empty or missing a header row")

        out: List[Dict[str, str]] = []
        for values in rows_iter:
            if values is None or all(v in (None, "") for v in values):
                continue
            rec = {h: ("" if v is None else str(v)) for h, v in zip(header, values)}
            out.append({c: rec.get(c, "") for c in ITEM_COLUMNS})
        return out
    finally:
        wb.close()
