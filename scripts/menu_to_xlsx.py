#!/usr/bin/env python3
"""
Menu → onePOS workbook, from the command line.

  python scripts/menu_to_xlsx.py menu.pdf -o onepos_menu_template.xlsx
  python scripts/menu_to_xlsx.py scanned.pdf --no-ocr      # fail instead of OCR
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from menu2pos import config
from menu2pos.contracts import validate_records_for_export
from menu2pos.pipeline import export_workbook, menu_from_document
from menu2pos.text_provider import ExtractionError, default_ocr

log = logging.getLogger("menu_to_xlsx")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Convert a menu document into a onePOS import workbook.")
    ap.add_argument("input", type=str, help="Menu file (pdf, png, jpg, jpeg, txt)")
    ap.add_argument("-o", "--output", type=str, help=f"Output .xlsx (default: {config.EXPORT_FILENAME})")
    ap.add_argument("--no-ocr", action="store_true", help="Disable the OCR fallback for scanned PDFs/images")
    ap.add_argument("--prefix", type=str, default=None, help=f"ItemID prefix (default: {config.ITEM_ID_PREFIX})")
    ap.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ...")
    args = ap.parse_args(argv)

    config.configure_logging(args.log_level)

    src = Path(args.input)
    if not src.exists():
        print(f"[ERR] Input not found: {src}", file=sys.stderr)
        return 1

    try:
        records = menu_from_document(src, ocr=None if args.no_ocr else default_ocr())
    except ExtractionError as e:
        print(f"[ERR] {e}", file=sys.stderr)
        return 1

    for w in validate_records_for_export(records):
        log.warning("#%d %s: %s", w["ordinal"], w["item_name"] or "(no name)", w["message"])

    out = Path(args.output or config.EXPORT_FILENAME)
    export_workbook(records, out, item_id_prefix=args.prefix)
    print(f"Wrote {len(records)} item(s) → {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
