# tests/test_day07_export_warnings.py
"""
Day 7: Export contracts, payload validation + advisory warnings

Covers:
  - validate_rows_payload accepts preview rows, rejects bad shapes
  - validate_records_for_export: missing_name, missing_section,
    name_truncated, description_truncated, missing_price; several per
    record; clean records pass
  - rows_to_records / records_to_rows round trip
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import menu2pos.contracts as menu_contracts
from menu2pos.contracts import validate_records_for_export, validate_rows_payload
from menu2pos.menu_types import ItemRecord
from menu2pos.pipeline import parse_menu_text, records_to_rows, rows_to_records
from menu2pos.workbook import CELL_TEXT_MAX


def _types(warnings):
    return [w["type"] for w in warnings]


# ===========================================================================
# Payload shape
# ===========================================================================
class TestPayload:
    def test_ok(self):
        ok, err = validate_rows_payload({"items": [
            {"section": "A", "item_name": "B", "description": "", "price": "1", "notes": None},
        ]})
        assert ok and err == ""

    def test_empty_items_ok(self):
        assert validate_rows_payload({"items": []}) == (True, "")

    def test_not_object(self):
        ok, err = validate_rows_payload([])
        assert not ok
        assert "object" in err

    def test_unknown_key(self):
        ok, err = validate_rows_payload({"items": [{"item_name": "A", "tax": "x"}]})
        assert not ok
        assert "tax" in err

    def test_numeric_price_rejected(self):
        ok, err = validate_rows_payload({"items": [{"item_name": "A", "price": 9.5}]})
        assert not ok
        assert "items[0].price" in err


# ===========================================================================
# Warnings
# ===========================================================================
class TestWarnings:
    def test_clean_record(self):
        recs = [ItemRecord(section="MAINS", item_name="Burger", price="9.00")]
        assert validate_records_for_export(recs) == []

    def test_empty(self):
        assert validate_records_for_export([]) == []

    def test_missing_name(self):
        w = validate_records_for_export(parse_menu_text("MAINS\n$5.00"))
        assert _types(w) == ["missing_name"]

    def test_missing_section(self):
        w = validate_records_for_export(parse_menu_text("Burger 9.00"))
        assert _types(w) == ["missing_section"]

    def test_name_truncated(self):
        w = validate_records_for_export([ItemRecord(section="S", item_name="x" * 25, price="1")])
        assert _types(w) == ["name_truncated"]

    def test_name_at_limit_not_flagged(self):
        assert validate_records_for_export([ItemRecord(section="S", item_name="x" * 24, price="1")]) == []

    def test_description_too_long_for_cell(self):
        rec = ItemRecord(section="S", item_name="Platter", description="y" * (CELL_TEXT_MAX + 1), price="9")
        assert _types(validate_records_for_export([rec])) == ["description_truncated"]

    def test_description_at_cell_limit_not_flagged(self):
        rec = ItemRecord(section="S", item_name="Platter", description="y" * CELL_TEXT_MAX, price="9")
        assert validate_records_for_export([rec]) == []

    def test_module_docstring(self):
        assert menu_contracts.__doc__ is not None
        assert "advisory warnings" in menu_contracts.__doc__

    def test_missing_price(self):
        w = validate_records_for_export([ItemRecord(section="S", item_name="Water")])
        assert _types(w) == ["missing_price"]

    def test_multiple_per_record(self):
        w = validate_records_for_export([ItemRecord(section="", item_name="")])
        assert set(_types(w)) == {"missing_name", "missing_section", "missing_price"}

    def test_warning_includes_item_info(self):
        w = validate_records_for_export([
            ItemRecord(section="S", item_name="Fries", price="3"),
            ItemRecord(section="S", item_name="Shake"),
        ])
        assert w[0]["ordinal"] == 2
        assert w[0]["item_name"] == "Shake"
        assert "message" in w[0]


# ===========================================================================
# JSON rows
# ===========================================================================
class TestRows:
    def test_round_trip(self):
        recs = parse_menu_text("APPETIZERS\nSpring Rolls - Crispy $6.50\nFries 3")
        assert rows_to_records(records_to_rows(recs)) == recs

    def test_rows_shape(self):
        rows = records_to_rows([ItemRecord(section="S", item_name="A")])
        assert rows == [{"section": "S", "item_name": "A", "description": "", "price": ""}]

    def test_nulls_and_missing_keys(self):
        recs = rows_to_records([{"item_name": "A", "description": None}])
        assert recs == [ItemRecord(section="", item_name="A", description="", price=None, notes=None)]

    def test_illegal_characters_removed(self):
        recs = rows_to_records([{"item_name": "Bur\x01ger", "section": "S"}])
        assert recs[0].item_name == "Burger"
