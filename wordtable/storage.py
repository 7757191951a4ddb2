"""Storage helpers for translation data, code word lists and compact tables.

Loading tolerates the encodings that translation caches are found in
(UTF-8 with or without BOM, UTF-16) and stray control characters left behind
by editors. A missing file is not an error: it yields an empty structure so
that a first build without any translations still produces output.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .models import CodeWords, CompactTable, LanguageResult

logger = logging.getLogger(__name__)


def _read_json(path: str | Path) -> Any:
    p = Path(path)
    if not p.exists():
        logger.warning("%s not found, using empty data", p)
        return None
    raw = p.read_bytes()

    def _decode() -> str:
        for enc in ("utf-8-sig", "utf-16"):
            try:
                return raw.decode(enc)
            except UnicodeDecodeError:
                continue
        return raw.decode("utf-8", errors="replace")

    text = _decode()
    if not text.strip():
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        cleaned = "".join(ch for ch in text if ch >= " " or ch in "\n\t\r")
        if not cleaned.strip():
            return None
        return json.loads(cleaned)


def _read_object(path: str | Path) -> Dict[str, Any]:
    data = _read_json(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


def load_translate_data(path: str | Path) -> Dict[str, LanguageResult]:
    """Return the per-language translation results stored at ``path``."""
    data = _read_object(path)
    results: Dict[str, LanguageResult] = {}
    for lang, value in data.items():
        if not isinstance(value, dict):
            raise ValueError(f"{path}: translations for {lang!r} must be an object")
        results[lang] = LanguageResult.from_mapping(value)
    return results


def load_code_words(path: str | Path) -> CodeWords:
    """Return the words referenced in code stored at ``path``."""
    return CodeWords.from_mapping(_read_object(path))


def load_table(path: str | Path) -> CompactTable:
    """Return a compact table previously written by :func:`save_table`."""
    return _read_object(path)


def save_table(table: CompactTable, path: str | Path) -> None:
    """Persist ``table`` as JSON at ``path``."""
    p = Path(path)
    p.write_text(json.dumps(table, ensure_ascii=False, indent=2), encoding="utf-8")


def save_code(code: str, path: str | Path) -> None:
    """Write generated code to ``path``."""
    p = Path(path)
    p.write_text(code + "\n", encoding="utf-8")
