"""
Price Parser
Finds the price token on a menu line.

A price token is an optional "$", 1-3 ASCII digits, and optionally "." or ","
followed by exactly two digits. It must start the line or follow a space,
and it must not run into a following non-space character ("9.00" matches
in "Burger 9.00", nothing matches in "Burger 9.00oz" or "Burger #9").
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

PRICE_RE = re.compile(r"(?:^| )(\$?[0-9]{1,3}(?:[.,][0-9]{2})?)(?!\S)")


def find_price(text: str) -> Optional[Tuple[str, int]]:
    """
    Return (token, start) for the first price token, or None.

    `start` is where the match begins, including the leading space when the
    token is not at the start of the line; text[:start] is everything that
    precedes the price.
    """
    m = PRICE_RE.search(text)
    if not m:
        return None
    return m.group(1), m.start()
