# menu2pos/mappers/schema_projector.py
"""
Schema Projector: ItemRecords → the five onePOS import tables.

  Items           one row per record
  Screen_Groups   header only
  Item_Links      header only
  Sales           header only
  Price_Levels    header only

Column contracts are hand-curated and fixed; each table gets an explicit
column tuple and an explicit row builder. Nothing here infers department,
category, tax or routing from menu text: those columns stay blank for a
human to fill in after export.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from ..menu_types import ExportTable, ItemRecord

log = logging.getLogger(__name__)

DEFAULT_ITEM_ID_PREFIX = "ITEM"
SHORT_NAME_MAX = 24

FLAG_NO = "No"
FLAG_YES = "Yes"

# Sheet names, in workbook order
SHEET_ITEMS = "Items"
SHEET_SCREEN_GROUPS = "Screen_Groups"
SHEET_ITEM_LINKS = "Item_Links"
SHEET_SALES = "Sales"
SHEET_PRICE_LEVELS = "Price_Levels"

ITEM_COLUMNS: Tuple[str, ...] = (
    "ItemID",
    "ItemName",
    "ShortName",
    "Section",
    "Description",
    "BasePrice",
    "SalesDept",
    "SalesCategory",
    "ItemType",
    "Course",
    "TaxProfile",
    "KDSRoute",
    "PrintHeaderName",
    "LabelOnly",
    "Consolidate",
    "Nutrients",
    "Allergens",
)

SCREEN_GROUP_COLUMNS: Tuple[str, ...] = (
    "ScreenGroupID", "Name", "IsModifier", "IsSide", "HeaderName", "Cols", "Rows", "Sort",
)

ITEM_LINK_COLUMNS: Tuple[str, ...] = (
    "ItemID", "LinkOrder", "ScreenGroupID", "IsModifier", "IsSide",
    "Force", "MultipleSelect", "BaseCharge", "AutoSelect",
)

SALES_COLUMNS: Tuple[str, ...] = ("SalesDepartment", "SalesCategory")

PRICE_LEVEL_COLUMNS: Tuple[str, ...] = ("PriceLevelName", "Notes")


def make_item_id(ordinal: int, prefix: str = DEFAULT_ITEM_ID_PREFIX) -> str:
    return f"{prefix}-{ordinal}"


def short_name(name: str) -> str:
    """Plain character truncation; no ellipsis, not word-aware."""
    return (name or "")[:SHORT_NAME_MAX]


def item_row(rec: ItemRecord, ordinal: int, *, prefix: str = DEFAULT_ITEM_ID_PREFIX) -> Dict[str, str]:
    """Map one record (1-based ordinal) to an Items row keyed by column name."""
    return {
        "ItemID": make_item_id(ordinal, prefix),
        "ItemName": rec.item_name,
        "ShortName": short_name(rec.item_name),
        "Section": rec.section,
        "Description": rec.description or "",
        "BasePrice": rec.price or "",
        "SalesDept": "",
        "SalesCategory": "",
        "ItemType": "",
        "Course": "",
        "TaxProfile": "",
        "KDSRoute": "",
        "PrintHeaderName": "",
        "LabelOnly": FLAG_NO,
        "Consolidate": FLAG_YES,
        "Nutrients": "",
        "Allergens": "",
    }


def _row_tuple(row: Dict[str, str], columns: Sequence[str]) -> Tuple[str, ...]:
    return tuple(row[c] for c in columns)


def project_items(records: Sequence[ItemRecord], *, prefix: str = DEFAULT_ITEM_ID_PREFIX) -> ExportTable:
    rows = tuple(
        _row_tuple(item_row(rec, i, prefix=prefix), ITEM_COLUMNS)
        for i, rec in enumerate(records, start=1)
    )
    return ExportTable(name=SHEET_ITEMS, columns=ITEM_COLUMNS, rows=rows)


# Nothing in classified text maps to these four; they ship as header-only
# skeletons so the import template is complete.

def project_screen_groups(records: Sequence[ItemRecord]) -> ExportTable:
    return ExportTable(name=SHEET_SCREEN_GROUPS, columns=SCREEN_GROUP_COLUMNS)


def project_item_links(records: Sequence[ItemRecord]) -> ExportTable:
    return ExportTable(name=SHEET_ITEM_LINKS, columns=ITEM_LINK_COLUMNS)


def project_sales(records: Sequence[ItemRecord]) -> ExportTable:
    return ExportTable(name=SHEET_SALES, columns=SALES_COLUMNS)


def project_price_levels(records: Sequence[ItemRecord]) -> ExportTable:
    return ExportTable(name=SHEET_PRICE_LEVELS, columns=PRICE_LEVEL_COLUMNS)


def project_tables(records: Sequence[ItemRecord], *, prefix: str = DEFAULT_ITEM_ID_PREFIX) -> List[ExportTable]:
    """All five tables, in workbook order."""
    tables = [
        project_items(records, prefix=prefix),
        project_screen_groups(records),
        project_item_links(records),
        project_sales(records),
        project_price_levels(records),
    ]
    log.debug("projected %d item row(s)", len(tables[0].rows))
    return tables
