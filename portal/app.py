# portal/app.py
from flask import Flask, jsonify, render_template, request, make_response

# --- Standard libs & typing ---
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

# big-file error handling + safer filenames
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

# Make project root importable so we can import menu2pos.* when run as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from menu2pos import config
from menu2pos.contracts import validate_records_for_export, validate_rows_payload
from menu2pos.menu_types import ItemRecord
from menu2pos.pipeline import export_workbook, parse_menu_text, records_to_rows, rows_to_records
from menu2pos.text_provider import (
    ALLOWED_EXTENSIONS,
    NoExtractableText,
    UnsupportedDocument,
    allowed_file,
    default_ocr,
    extract_text_from_bytes,
)
from menu2pos.workbook import XLSX_MIMETYPE

log = logging.getLogger(__name__)

# ------------------------
# App & Config
# ------------------------
app = Flask(__name__)

app.config["SECRET_KEY"] = config.SECRET_KEY
app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_MB * 1024 * 1024
# Dev QoL: auto-reload templates when iterating on UI
app.config["TEMPLATES_AUTO_RELOAD"] = True

from portal.ocr_health import bp as ocr_health_bp
app.register_blueprint(ocr_health_bp)

_ALLOWED_LABEL = ", ".join(sorted(ALLOWED_EXTENSIONS))


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _items_payload(records: List[ItemRecord], source: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "items": records_to_rows(records),
        "count": len(records),
        "warnings": validate_records_for_export(records),
        "source": source,
        "extracted_at": _now_iso(),
    }


# ------------------------
# Pages
# ------------------------
@app.get("/")
def index():
    return render_template("index.html", allowed=_ALLOWED_LABEL, export_filename=config.EXPORT_FILENAME)


# ------------------------
# API
# ------------------------
@app.post("/api/menus/extract")
def extract_menu():
    """Upload one document; returns the parsed rows for preview."""
    try:
        if "file" not in request.files:
            return jsonify({"error": "No file field 'file' provided"}), 400
        file = request.files["file"]
        if file.filename == "":
            return jsonify({"error": "Empty filename"}), 400
        if not allowed_file(file.filename):
            return jsonify({"error": f"Unsupported file type. Allowed: {_ALLOWED_LABEL}"}), 400

        name = secure_filename(file.filename) or "upload"
        data = file.read()
    except RequestEntityTooLarge:
        return jsonify({"error": "File too large. Try a smaller file or raise MAX_UPLOAD_MB."}), 413

    try:
        text = extract_text_from_bytes(data, name, ocr=default_ocr())
    except UnsupportedDocument as e:
        return jsonify({"error": str(e)}), 400
    except NoExtractableText as e:
        log.warning("extraction failed for %s: %s", name, e)
        return jsonify({"error": "Could not extract text from this document.", "detail": str(e)}), 422

    records = parse_menu_text(text)
    return jsonify(_items_payload(records, {"type": "upload", "file": name, "chars": len(text)})), 200


@app.post("/api/menus/parse")
def parse_menu():
    """Parse raw text (already extracted elsewhere)."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not isinstance(payload.get("text"), str):
        return jsonify({"error": "Expected JSON body {\"text\": \"...\"}"}), 400

    records = parse_menu_text(payload["text"])
    return jsonify(_items_payload(records, {"type": "text", "chars": len(payload["text"])})), 200


@app.post("/api/menus/export.xlsx")
def export_menu_xlsx():
    """Preview rows (possibly edited) → onePOS template workbook."""
    payload = request.get_json(silent=True)
    ok, err = validate_rows_payload(payload)
    if not ok:
        return jsonify({"error": f"schema: {err}"}), 400

    records = rows_to_records(payload["items"])
    data = export_workbook(records)
    log.info("exported %d item(s) to %s", len(records), config.EXPORT_FILENAME)

    resp = make_response(data)
    resp.headers["Content-Type"] = XLSX_MIMETYPE
    resp.headers["Content-Disposition"] = f'attachment; filename="{config.EXPORT_FILENAME}"'
    return resp


@app.errorhandler(413)
def too_large(_e):
    return jsonify({"error": "File too large. Try a smaller file or raise MAX_UPLOAD_MB."}), 413


# ------------------------
# Diagnostics
# ------------------------
@app.get("/__ping")
def __ping():
    return jsonify({"ok": True, "time": _now_iso()})


# ------------------------
# Run
# ------------------------
if __name__ == "__main__":
    config.configure_logging()
    app.run(host="0.0.0.0", port=5000, debug=True)
