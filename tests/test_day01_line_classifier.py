# tests/test_day01_line_classifier.py
"""
Day 1: Line Classifier

Covers:
  - Price token: $ optional, 1-3 digits, optional ./, + 2 decimals, word-bounded
  - First price wins
  - Heading detection (ALL CAPS, 3+ chars, no price)
  - Name/description split: " - " preferred over ": ", dot leaders stripped
  - Orphan fallthrough
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from menu2pos.menu_types import LINE_HEADING, LINE_ITEM, LINE_ORPHAN
from menu2pos.parsers.line_classifier import (
    classify_line,
    is_heading,
    split_name_description,
)
from menu2pos.parsers.price_parser import find_price


# ===========================================================================
# Price token
# ===========================================================================
class TestPriceToken:
    @pytest.mark.parametrize("line,token", [
        ("Burger 9.00", "9.00"),
        ("Fries 3", "3"),
        ("Spring Rolls $6.50", "$6.50"),
        ("Gnocchi 12,50", "12,50"),
        ("Lobster 125.00", "125.00"),
        ("$7", "$7"),
        ("7.25", "7.25"),
    ])
    def test_matches(self, line, token):
        hit = find_price(line)
        assert hit is not None
        assert hit[0] == token

    @pytest.mark.parametrize("line", [
        "Burger 9.00oz",        # runs into a non-space
        "Combo #9",             # not preceded by space
        "Steak 1000",           # 4 digits
        "Soup 4.5",             # single decimal digit
        "Wings x12",
        "just some text",
        "Tea ٣",            # Arabic-Indic digit
        "Tea ５.００",  # full-width digits
    ])
    def test_no_match(self, line):
        assert find_price(line) is None

    def test_non_ascii_digits_stay_orphan(self):
        assert classify_line("Tea ٣").line_type == LINE_ORPHAN

    def test_first_match_wins(self):
        hit = find_price("Pizza 10 inch 12.99 14 inch 15.99")
        assert hit[0] == "10"

    def test_start_includes_leading_space(self):
        line = "Tea 2.50"
        token, start = find_price(line)
        assert line[:start] == "Tea"
        assert token == "2.50"

    def test_price_followed_by_space(self):
        assert find_price("Tea 2.50 each")[0] == "2.50"


# ===========================================================================
# Headings
# ===========================================================================
class TestHeading:
    @pytest.mark.parametrize("line", [
        "APPETIZERS",
        "SOUPS & SALADS",
        "KIDS MENU - UNDER TWELVE",
        "BEER & WINE",
        "ABC",
    ])
    def test_heading(self, line):
        assert is_heading(line)
        assert classify_line(line).line_type == LINE_HEADING

    @pytest.mark.parametrize("line", [
        "AB",                  # too short
        "Appetizers",          # mixed case
        "SOUPS: DAILY",        # colon not allowed
        "DESSERTS!",
    ])
    def test_not_heading(self, line):
        assert not is_heading(line)

    def test_caps_with_price_is_item(self):
        cl = classify_line("WINGS 9.99")
        assert cl.line_type == LINE_ITEM
        assert cl.item_name == "WINGS"
        assert cl.price == "9.99"

    def test_caps_with_bare_number_is_item(self):
        # "2" is a valid price token, so this is never a heading
        cl = classify_line("SIDES 2")
        assert cl.line_type == LINE_ITEM
        assert cl.price == "2"

    def test_caps_with_glued_number_stays_heading(self):
        # "12OZ" has no word-bounded price token
        assert classify_line("DRAFT BEER 12OZ").line_type == LINE_HEADING


# ===========================================================================
# Name / description split
# ===========================================================================
class TestNameDescription:
    def test_dash(self):
        assert split_name_description("Spring Rolls - Crispy veggie rolls") == ("Spring Rolls", "Crispy veggie rolls")

    def test_colon(self):
        assert split_name_description("Soup: Chef's daily pick") == ("Soup", "Chef's daily pick")

    def test_no_separator(self):
        assert split_name_description("  Cheeseburger ") == ("Cheeseburger", "")

    def test_dash_wins_even_if_later(self):
        name, desc = split_name_description("Combo: Burger - with fries")
        assert name == "Combo: Burger"
        assert desc == "with fries"

    def test_first_dash_only(self):
        assert split_name_description("Salad - greens - vinaigrette") == ("Salad", "greens - vinaigrette")

    def test_dot_leaders_stripped(self):
        assert split_name_description("Chicken Parm ........") == ("Chicken Parm", "")

    def test_dot_leaders_with_spaces_stripped(self):
        assert split_name_description("Chicken Parm . . . .") == ("Chicken Parm", "")

    def test_hyphenated_word_not_a_separator(self):
        assert split_name_description("Stir-fry Noodles") == ("Stir-fry Noodles", "")


# ===========================================================================
# Full classification
# ===========================================================================
class TestClassifyLine:
    def test_item_line_fields(self):
        cl = classify_line("Spring Rolls - Crispy veggie rolls $6.50")
        assert cl.line_type == LINE_ITEM
        assert cl.item_name == "Spring Rolls"
        assert cl.description == "Crispy veggie rolls"
        assert cl.price == "$6.50"

    def test_item_with_dot_leaders(self):
        cl = classify_line("Garlic Knots ....... 4.50")
        assert cl.item_name == "Garlic Knots"
        assert cl.description == ""
        assert cl.price == "4.50"

    def test_text_after_price_ignored(self):
        cl = classify_line("Tea 2.50 each")
        assert cl.item_name == "Tea"
        assert cl.price == "2.50"

    def test_price_only_line(self):
        cl = classify_line("$5.00")
        assert cl.line_type == LINE_ITEM
        assert cl.item_name == ""
        assert cl.price == "$5.00"

    def test_orphan(self):
        cl = classify_line("served with rice and beans")
        assert cl.line_type == LINE_ORPHAN
        assert cl.text == "served with rice and beans"
        assert cl.price is None

    def test_stateless(self):
        a = classify_line("Burger 9.00")
        b = classify_line("Burger 9.00")
        assert a == b
