# menu2pos/parsers/record_builder.py
"""
Record Builder: folds classified lines into ItemRecords.

Single left-to-right pass with two pieces of running state, the current
section label and the records emitted so far. Both live on a
RecordAccumulator created per call, so concurrent parses never share state.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List

from ..menu_types import (
    ClassifiedLine,
    ItemRecord,
    LINE_HEADING,
    LINE_ITEM,
)
from .line_classifier import classify_line

log = logging.getLogger(__name__)

_NEWLINES_RE = re.compile(r"\n+")


@dataclass
class RecordAccumulator:
    section: str = ""
    records: List[ItemRecord] = field(default_factory=list)
    dropped: int = 0  # orphan lines seen before the first item


def split_lines(text: str) -> List[str]:
    """Split on runs of newlines, trim each piece, drop empties."""
    return [ln.strip() for ln in _NEWLINES_RE.split(text or "") if ln.strip()]


def fold_line(acc: RecordAccumulator, cl: ClassifiedLine) -> RecordAccumulator:
    if cl.line_type == LINE_HEADING:
        acc.section = cl.text
    elif cl.line_type == LINE_ITEM:
        acc.records.append(ItemRecord(
            section=acc.section,
            item_name=cl.item_name,
            description=cl.description,
            price=cl.price,
        ))
    elif acc.records:
        last = acc.records[-1]
        last.description = f"{last.description} {cl.text}" if last.description else cl.text
    else:
        acc.dropped += 1
    return acc


def build_records(lines: Iterable[str]) -> List[ItemRecord]:
    acc = RecordAccumulator()
    for line in lines:
        fold_line(acc, classify_line(line))
    if acc.dropped:
        log.debug("dropped %d orphan line(s) before the first item", acc.dropped)
    return acc.records
