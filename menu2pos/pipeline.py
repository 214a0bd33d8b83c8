# menu2pos/pipeline.py
"""
Pipeline façade: text → records → tables → workbook.

Public API:
- parse_menu_text(text) -> [ItemRecord, ...]
- build_tables(records) -> [ExportTable x5]
- export_workbook(records, path=None) -> bytes | Path
- menu_from_document(path, ocr=...) -> [ItemRecord, ...]
- records_to_rows / rows_to_records for the portal's JSON preview round trip

Every call builds its own state; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from . import config
from .mappers.schema_projector import project_tables
from .menu_types import ExportTable, ItemRecord, ItemRow
from .parsers.record_builder import build_records, split_lines
from .text_provider import OcrFallback, extract_text
from .workbook import write_workbook

log = logging.getLogger(__name__)


def parse_menu_text(text: str) -> List[ItemRecord]:
    lines = split_lines(text)
    records = build_records(lines)
    log.info("parsed %d line(s) into %d item(s)", len(lines), len(records))
    return records


def build_tables(records: Sequence[ItemRecord], *, item_id_prefix: Optional[str] = None) -> List[ExportTable]:
    return project_tables(records, prefix=item_id_prefix or config.ITEM_ID_PREFIX)


def export_workbook(
    records: Sequence[ItemRecord],
    path: Optional[Union[str, Path]] = None,
    *,
    item_id_prefix: Optional[str] = None,
) -> Union[bytes, Path]:
    return write_workbook(build_tables(records, item_id_prefix=item_id_prefix), path)


def menu_from_document(path: Union[str, Path], *, ocr: Optional[OcrFallback] = None) -> List[ItemRecord]:
    """Extract + parse. Extraction errors propagate to the caller."""
    return parse_menu_text(extract_text(path, ocr=ocr))


# ---------------------------------------------------------------------------
# JSON rows (portal preview/edit)
# ---------------------------------------------------------------------------

def records_to_rows(records: Sequence[ItemRecord]) -> List[ItemRow]:
    rows: List[ItemRow] = []
    for r in records:
        row: ItemRow = {"section": r.section, "item_name": r.item_name, "description": r.description or ""}
        row["price"] = r.price or ""
        if r.notes:
            row["notes"] = r.notes
        rows.append(row)
    return rows


def _cell_text(v: Any) -> str:
    return ILLEGAL_CHARACTERS_RE.sub("", v) if isinstance(v, str) else ""


def rows_to_records(rows: Sequence[Dict[str, Any]]) -> List[ItemRecord]:
    """Rows are assumed to have passed contracts.validate_rows_payload."""
    out: List[ItemRecord] = []
    for row in rows:
        out.append(ItemRecord(
            section=_cell_text(row.get("section")),
            item_name=_cell_text(row.get("item_name")),
            description=_cell_text(row.get("description")),
            price=_cell_text(row.get("price")) or None,
            notes=_cell_text(row.get("notes")) or None,
        ))
    return out
