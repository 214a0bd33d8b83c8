# menu2pos/parsers/line_classifier.py
"""
Line Classifier: decides what one line of menu text is.

Every trimmed, non-empty line lands in exactly one bucket:
  - heading: ALL CAPS label (A-Z, 0-9, space, &, -), 3+ chars, no price token
  - item:    has a price token; the text before it splits into name/description
  - orphan:  anything else; the record builder folds it into the last item

The classifier is stateless. Section tracking lives in record_builder.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from ..menu_types import (
    ClassifiedLine,
    LINE_HEADING,
    LINE_ITEM,
    LINE_ORPHAN,
)
from .price_parser import find_price

log = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"[A-Z0-9 &\-]{3,}")

# Dot leaders / spacing between the item text and its price
_TRAILING_LEADER_RE = re.compile(r"[.\s]+$")

# Name/description separators, in priority order. The first rule that is
# present in the text wins, regardless of where the others occur.
NAME_DESC_SEPARATORS: Tuple[str, ...] = (" - ", ": ")


def is_heading(line: str) -> bool:
    if not _HEADING_RE.fullmatch(line):
        return False
    return find_price(line) is None


def split_name_description(text: str) -> Tuple[str, str]:
    """
    Split the pre-price text of an item line into (name, description).

      "Spring Rolls - Crispy veggie rolls"  -> ("Spring Rolls", "Crispy veggie rolls")
      "Soup: Daily pick"                    -> ("Soup", "Daily pick")
      "Chicken Parm ......"                 -> ("Chicken Parm", "")
    """
    before = _TRAILING_LEADER_RE.sub("", text.strip())
    for sep in NAME_DESC_SEPARATORS:
        idx = before.find(sep)
        if idx >= 0:
            return before[:idx].strip(), before[idx + len(sep):].strip()
    return before.strip(), ""


def classify_line(line: str) -> ClassifiedLine:
    """Classify a single trimmed, non-empty line."""
    hit: Optional[Tuple[str, int]] = find_price(line)

    if hit is None:
        if is_heading(line):
            return ClassifiedLine(line_type=LINE_HEADING, text=line)
        return ClassifiedLine(line_type=LINE_ORPHAN, text=line)

    price, start = hit
    name, desc = split_name_description(line[:start])
    log.debug("item line: name=%r price=%r", name, price)
    return ClassifiedLine(
        line_type=LINE_ITEM,
        text=line,
        item_name=name,
        description=desc,
        price=price,
    )
