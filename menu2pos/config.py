# menu2pos/config.py
"""
Runtime configuration from the environment (and an optional .env in the
project root). Values are read once at import; tests that need different
values monkeypatch the module attributes.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]

# --- Load .env if available (so TESSERACT_CMD / POPPLER_PATH work even without PATH) ---
load_dotenv(ROOT / ".env")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


# --- OCR ---
TESSERACT_CMD: Optional[str] = os.getenv("TESSERACT_CMD") or None
TESSERACT_LANG = os.getenv("TESSERACT_LANG") or "eng"
TESSERACT_CONFIG = os.getenv("TESSERACT_CONFIG") or "--oem 1 --psm 6"
POPPLER_PATH: Optional[str] = os.getenv("POPPLER_PATH") or None
OCR_DPI = _env_int("OCR_DPI", 300)
OCR_FALLBACK = _env_bool("OCR_FALLBACK", True)

# PDFs whose text layer yields fewer characters than this are treated as scanned
MIN_TEXT_CHARS = _env_int("MIN_TEXT_CHARS", 10)

# --- Export ---
ITEM_ID_PREFIX = os.getenv("ITEM_ID_PREFIX") or "ITEM"
EXPORT_FILENAME = os.getenv("EXPORT_FILENAME") or "onepos_menu_template.xlsx"

# --- Portal ---
MAX_UPLOAD_MB = _env_int("MAX_UPLOAD_MB", 20)
SECRET_KEY = os.getenv("SECRET_KEY") or "dev-secret-change-me"

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()


def resolve_tesseract_cmd() -> str:
    """Explicit env var if it exists on disk, else whatever is on PATH."""
    if TESSERACT_CMD and Path(TESSERACT_CMD).exists():
        return TESSERACT_CMD
    return shutil.which("tesseract") or shutil.which("tesseract.exe") or ""


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
