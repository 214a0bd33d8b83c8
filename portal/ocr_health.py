from __future__ import annotations
from flask import Blueprint, jsonify

from menu2pos import text_provider

bp = Blueprint("ocr_health", __name__)

@bp.route("/ocr/health", methods=["GET"])
def ocr_health():
    return jsonify(text_provider.health())
