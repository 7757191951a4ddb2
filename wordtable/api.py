"""Flask blueprint exposing the compaction pipeline.

Build tooling that does not run Python in-process posts its translation
results here and receives either the compact table or the generated code.
Reserved category names and malformed bodies are answered with HTTP 400.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify, request

from .compactor import table_stats
from .config import Settings
from .models import CodeWords, ConfigurationError, LanguageResult
from .pipeline import build_table
from .tree_builder import generate_code

logger = logging.getLogger(__name__)

bp = Blueprint("wordtable", __name__, url_prefix="/api/wordtable")


class InvalidPayload(ValueError):
    """Request body does not have the expected shape."""


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidPayload("request body must be a JSON object")
    return data


def _table_from_payload(payload: Dict[str, Any]):
    data = payload.get("data") or {}
    if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
        raise InvalidPayload("`data` must map languages to objects")
    code_words = payload.get("codeWords")
    if code_words is not None and not isinstance(code_words, dict):
        raise InvalidPayload("`codeWords` must be an object")

    results = {lang: LanguageResult.from_mapping(value) for lang, value in data.items()}
    words = CodeWords.from_mapping(code_words) if code_words is not None else None
    return build_table(results, words)


def _settings() -> Settings:
    return current_app.config.get("WORDTABLE_SETTINGS") or Settings()


@bp.errorhandler(ValueError)
def _bad_request(exc: ValueError) -> Tuple[Any, int]:
    if isinstance(exc, ConfigurationError):
        logger.warning("Rejected reserved category: %s", exc)
    return jsonify({"error": str(exc)}), 400


@bp.route("/", methods=["GET"])
def root() -> Any:
    """Readiness endpoint."""
    return jsonify({"status": "ok"})


@bp.route("/compact", methods=["POST"])
def compact() -> Any:
    table = _table_from_payload(_payload())
    return jsonify(table)


@bp.route("/generate", methods=["POST"])
def generate() -> Any:
    settings = _settings()
    table = _table_from_payload(_payload())
    return jsonify({"code": generate_code(table, indent=settings.indent, quotes=settings.quotes)})


@bp.route("/stats", methods=["POST"])
def stats() -> Any:
    table = _payload().get("table")
    if not isinstance(table, dict):
        raise InvalidPayload("`table` must be an object")
    return jsonify(table_stats(table).as_dict())
