"""
Menu2POS types: records that flow Text → Lines → ItemRecords → ExportTables.

Dataclasses are the in-process shapes; the TypedDict `ItemRow` is the JSON
shape the portal sends to the browser for preview/edit and receives back on
export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NotRequired, Optional, Tuple, TypedDict


# ────────────────────────────────────────────────
# Line classification
# ────────────────────────────────────────────────

LINE_HEADING = "heading"
LINE_ITEM = "item"
LINE_ORPHAN = "orphan"


@dataclass
class ClassifiedLine:
    """One input line after classification."""
    line_type: str            # heading | item | orphan
    text: str
    item_name: str = ""
    description: str = ""
    price: Optional[str] = None


# ────────────────────────────────────────────────
# Records
# ────────────────────────────────────────────────

@dataclass
class ItemRecord:
    section: str
    item_name: str
    description: str = ""
    price: Optional[str] = None   # raw matched token, e.g. "$6.50"
    notes: Optional[str] = None


class ItemRow(TypedDict):
    section: str
    item_name: str
    description: NotRequired[str]
    price: NotRequired[str]
    notes: NotRequired[str]


# ────────────────────────────────────────────────
# Export tables
# ────────────────────────────────────────────────

@dataclass(frozen=True)
class ExportTable:
    """
    One named sheet: a fixed ordered header and zero or more rows.
    Rows are tuples aligned with `columns`.
    """
    name: str
    columns: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...] = field(default_factory=tuple)

    def as_dicts(self) -> List[dict]:
        return [dict(zip(self.columns, r)) for r in self.rows]
