# menu2pos/contracts.py
"""
Contracts & validators for the export path.

- validate_rows_payload: shape check on the JSON body the portal posts back
  for export (preview rows, possibly hand-edited).
- validate_records_for_export: advisory warnings shown next to the preview.
  Warnings never block an export; the sheet is meant to be finished by hand.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from .mappers.schema_projector import SHORT_NAME_MAX
from .menu_types import ItemRecord
from .workbook import CELL_TEXT_MAX

RowKeys = {"section", "item_name", "description", "price", "notes"}
ExportWarning = Dict[str, Any]


def validate_rows_payload(payload: Any) -> Tuple[bool, str]:
    if not isinstance(payload, dict):
        return False, "payload must be a JSON object"

    items = payload.get("items")
    if not isinstance(items, list):
        return False, "items must be a list"

    for i, it in enumerate(items):
        if not isinstance(it, dict):
            return False, f"items[{i}] must be an object"
        unknown = set(it) - RowKeys
        if unknown:
            return False, f"items[{i}] has unknown keys: {', '.join(sorted(unknown))}"
        if not isinstance(it.get("item_name", ""), str):
            return False, f"items[{i}].item_name must be a string"
        if not isinstance(it.get("section", ""), str):
            return False, f"items[{i}].section must be a string"
        # optional keys may be null, but not other types
        for key in ("description", "price", "notes"):
            if it.get(key) is not None and not isinstance(it[key], str):
                return False, f"items[{i}].{key} must be a string or null"

    return True, ""


def _warn(kind: str, ordinal: int, rec: ItemRecord, message: str) -> ExportWarning:
    return {"type": kind, "ordinal": ordinal, "item_name": rec.item_name, "message": message}


def validate_records_for_export(records: Sequence[ItemRecord]) -> List[ExportWarning]:
    """One warning per problem; a record can collect several."""
    warnings: List[ExportWarning] = []
    for i, rec in enumerate(records, start=1):
        if not (rec.item_name or "").strip():
            warnings.append(_warn("missing_name", i, rec, "Item has no name."))
        if not (rec.section or "").strip():
            warnings.append(_warn("missing_section", i, rec, "Item appears before any section heading."))
        if len(rec.item_name or "") > SHORT_NAME_MAX:
            warnings.append(_warn(
                "name_truncated", i, rec,
                f"ShortName will be cut to {SHORT_NAME_MAX} characters.",
            ))
        if len(rec.description or "") > CELL_TEXT_MAX:
            warnings.append(_warn(
                "description_truncated", i, rec,
                f"Description is longer than {CELL_TEXT_MAX} characters and will be cut in the sheet.",
            ))
        if not (rec.price or "").strip():
            warnings.append(_warn("missing_price", i, rec, "Item has no price."))
    return warnings
