"""Compactor and gap filler chained together."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from .compactor import TranslateData, table_stats, to_translate_table
from .gap_filler import fill_untranslated_words
from .models import CodeWords, CompactTable

logger = logging.getLogger(__name__)


def build_table(
    data: TranslateData,
    code_words: Optional[Union[CodeWords, Mapping[str, Any]]] = None,
) -> CompactTable:
    """Return the compact table for ``data`` with placeholders for ``code_words``."""
    table = to_translate_table(data)
    if code_words is not None:
        table = fill_untranslated_words(table, code_words)
    stats = table_stats(table)
    logger.info(
        "Table: %d languages, %d words (%d untranslated)",
        stats.languages,
        stats.words,
        stats.placeholders,
    )
    return table
