# menu2pos/text_provider.py
"""
Document text provider: one document in, one string of menu text out.

  .pdf         text layer via PyMuPDF; if that comes back (nearly) empty the
               PDF is probably scanned, and the optional OCR fallback gets a
               turn: render pages (pdf2image + poppler) → recognize each page
               (pytesseract)
  .png/.jpg    straight to OCR
  .txt         decoded as UTF-8

When nothing usable comes out, NoExtractableText is raised. The parser never
sees that error; callers decide what to tell the user.
"""

from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

import fitz  # PyMuPDF
import pytesseract
from pdf2image import convert_from_bytes
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFSyntaxError,
)
from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError

from . import config

log = logging.getLogger(__name__)

PDF_EXTENSIONS = {"pdf"}
IMAGE_EXTENSIONS = {"png", "jpg", "jpeg"}
TEXT_EXTENSIONS = {"txt"}
ALLOWED_EXTENSIONS = PDF_EXTENSIONS | IMAGE_EXTENSIONS | TEXT_EXTENSIONS

# Control characters a spreadsheet cell cannot hold (keeps \t and \n)
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


class ExtractionError(Exception):
    """Base for everything the provider can raise."""


class NoExtractableText(ExtractionError):
    """The document has no text layer and no fallback produced text."""


class UnsupportedDocument(ExtractionError):
    """File type the provider does not handle."""


class OcrFallback(Protocol):
    """Render → recognize. Implementations must not raise on blank pages."""

    def render_pages(self, pdf_bytes: bytes) -> List[Image.Image]: ...

    def recognize(self, image: Image.Image) -> str: ...


class TesseractOcr:
    """Default OCR collaborator: pdf2image for rendering, Tesseract for text."""

    def __init__(
        self,
        *,
        lang: Optional[str] = None,
        tess_config: Optional[str] = None,
        dpi: Optional[int] = None,
        poppler_path: Optional[str] = None,
    ):
        self.lang = lang or config.TESSERACT_LANG
        self.tess_config = tess_config or config.TESSERACT_CONFIG
        self.dpi = dpi or config.OCR_DPI
        self.poppler_path = poppler_path or config.POPPLER_PATH

        cmd = config.resolve_tesseract_cmd()
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd

    def render_pages(self, pdf_bytes: bytes) -> List[Image.Image]:
        return convert_from_bytes(pdf_bytes, dpi=self.dpi, poppler_path=self.poppler_path)

    def recognize(self, image: Image.Image) -> str:
        img = image.convert("L")
        img = ImageOps.autocontrast(img)
        img = img.filter(ImageFilter.SHARPEN)
        return pytesseract.image_to_string(img, lang=self.lang, config=self.tess_config) or ""


def default_ocr() -> Optional[OcrFallback]:
    """The configured fallback, or None when OCR_FALLBACK is off."""
    return TesseractOcr() if config.OCR_FALLBACK else None


def clean_text(text: str) -> str:
    return _CONTROL_CHARS_RE.sub("", text or "")


def _extension(name: str) -> str:
    return name.rsplit(".", 1)[1].lower() if "." in name else ""


def allowed_file(filename: str) -> bool:
    return _extension(filename) in ALLOWED_EXTENSIONS


def pdf_text_layer(pdf_bytes: bytes) -> str:
    """Concatenate the text layer of every page, one page per block."""
    try:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            return "\n".join(page.get_text("text") for page in doc)
    except RuntimeError as e:  # fitz.FileDataError and friends
        raise NoExtractableText(f"Could not open PDF: {e}") from e


def _ocr_pdf(pdf_bytes: bytes, ocr: OcrFallback) -> str:
    try:
        pages = ocr.render_pages(pdf_bytes)
    except (PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError, OSError) as e:
        raise NoExtractableText(f"Could not render PDF pages for OCR: {e}") from e

    buf = []
    for n, page in enumerate(pages, start=1):
        try:
            txt = ocr.recognize(page)
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as e:
            raise NoExtractableText(f"OCR failed on page {n}: {e}") from e
        if txt.strip():
            buf.append(txt)
    return "\n".join(buf)


def _ocr_image(data: bytes, ocr: OcrFallback) -> str:
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            return ocr.recognize(img)
    except UnidentifiedImageError as e:
        raise NoExtractableText(f"Unreadable image: {e}") from e
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as e:
        raise NoExtractableText(f"OCR failed: {e}") from e


def extract_text_from_bytes(data: bytes, filename: str, *, ocr: Optional[OcrFallback] = None) -> str:
    """
    Extract menu text from an in-memory document.

    `filename` only selects the handler (by extension).
    Raises UnsupportedDocument / NoExtractableText.
    """
    ext = _extension(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise UnsupportedDocument(
            f"Unsupported file type {ext or '(none)'!r}. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    if ext in TEXT_EXTENSIONS:
        text = data.decode("utf-8", errors="replace")
        engine = "plain-text"
    elif ext in IMAGE_EXTENSIONS:
        if ocr is None:
            raise NoExtractableText("Image uploads need OCR, and OCR is disabled.")
        text = _ocr_image(data, ocr)
        engine = "ocr-image"
    else:
        text = pdf_text_layer(data)
        engine = "pdf-text-layer"
        if len(text.strip()) < config.MIN_TEXT_CHARS:
            log.info("%s: text layer has %d chars; treating as scanned", filename, len(text.strip()))
            if ocr is None:
                raise NoExtractableText(
                    "Could not extract text from this document: it has no text layer "
                    "(likely a scanned image) and OCR fallback is disabled."
                )
            text = _ocr_pdf(data, ocr)
            engine = "ocr-fallback"

    text = clean_text(text)
    if not text.strip():
        raise NoExtractableText("Could not extract text from this document.")
    log.info("%s: extracted %d chars via %s", filename, len(text), engine)
    return text


def extract_text(path: Union[str, Path], *, ocr: Optional[OcrFallback] = None) -> str:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    return extract_text_from_bytes(path.read_bytes(), path.name, ocr=ocr)


def health() -> Dict[str, Any]:
    """OCR engine + environment health, for /ocr/health."""
    cmd = config.resolve_tesseract_cmd()
    version: Optional[str] = None
    error: Optional[str] = None
    if cmd:
        pytesseract.pytesseract.tesseract_cmd = cmd
        try:
            version = str(pytesseract.get_tesseract_version())
        except (pytesseract.TesseractNotFoundError, OSError) as e:
            error = str(e)

    poppler_path = config.POPPLER_PATH or ""
    return {
        "engine": "menu2pos",
        "ocr_fallback": config.OCR_FALLBACK,
        "pymupdf": fitz.version[0],
        "tesseract": {
            "cmd": cmd,
            "version": version,
            "found_on_disk": bool(cmd and Path(cmd).exists()),
            "error": error,
        },
        "poppler": {
            "path_env": poppler_path,
            "present": bool(poppler_path and Path(poppler_path).exists()),
        },
    }
